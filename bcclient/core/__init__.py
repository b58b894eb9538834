"""Core configuration and exceptions."""

from .config import ClientConfig, get_base_url
from .exceptions import (
    ClientError,
    ClientRequestError,
    DeletionStalledError,
    ProtocolError,
    RemoteError,
    ServerError,
    TransportError,
)

__all__ = [
    "ClientConfig",
    "get_base_url",
    "ClientError",
    "RemoteError",
    "ClientRequestError",
    "ServerError",
    "TransportError",
    "ProtocolError",
    "DeletionStalledError",
]
