"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..runtime.rest.http_client import RawResponse


class ClientError(Exception):
    """Base exception for all library errors."""

    pass


class RemoteError(ClientError):
    """The API answered with a non-successful status.

    The message mirrors the wire failure as ``"<status> - <status_text>: <body>"``
    so callers can log it verbatim.
    """

    def __init__(self, status_code: int, status_text: str = "", body_text: str = "") -> None:
        super().__init__(f"{status_code} - {status_text}: {body_text}")
        self.status_code = status_code
        self.status_text = status_text
        self.body_text = body_text

    @classmethod
    def from_response(cls, response: RawResponse) -> RemoteError:
        """Build the most specific error subclass for a response."""
        if 400 <= response.status < 500:
            error_cls: type[RemoteError] = ClientRequestError
        elif 500 <= response.status < 600:
            error_cls = ServerError
        else:
            error_cls = RemoteError
        return error_cls(response.status, response.status_text, response.text)


class ClientRequestError(RemoteError):
    """4xx response. Never retried."""

    pass


class ServerError(RemoteError):
    """5xx response that survived the retry budget."""

    pass


class TransportError(ClientError):
    """No response could be obtained (connection failure or timeout)."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class ProtocolError(ClientError):
    """Response body is not a valid envelope."""

    pass


class DeletionStalledError(ClientError):
    """Drain loop keeps seeing items it already deleted.

    Raised when the remote collection does not compact after deletion, which
    would otherwise make the drain loop run forever.
    """

    def __init__(self, message: str, endpoint: str, rounds: int) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.rounds = rounds
