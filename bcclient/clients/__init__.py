"""High-level clients."""

from .store_client import BigCommerceClient

__all__ = ["BigCommerceClient"]
