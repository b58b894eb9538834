"""Client configuration.

Holds the store coordinates and the knobs the request core reads: retry
budgets, per-attempt timeout, pagination concurrency and deletion batch size.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

API_ROOT = "https://api.bigcommerce.com/stores"

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_TIMEOUT_MS = 15000
DEFAULT_CONCURRENCY = 3
DEFAULT_DELETE_LIMIT = 3


def get_base_url(store_hash: str) -> str:
    """Get the Management API base URL for a store.

    Examples:
        >>> get_base_url("gha3w9n1at")
        'https://api.bigcommerce.com/stores/gha3w9n1at/'
    """
    return f"{API_ROOT}/{store_hash}/"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for a store client.

    Attributes:
        store_hash: Store hash (e.g. ``gha3w9n1at``), used to derive ``base_url``
        token: API token sent as ``X-Auth-Token``
        base_url: Explicit base URL (overrides the one derived from store_hash)
        max_attempts: Retries allowed for 5xx responses
        timeout_ms: Wall-clock timeout of a single attempt
        concurrency: Pages fetched per pagination wave
        delete_limit: Page size and in-flight DELETEs for delete_all
        max_transport_attempts: Retries allowed when no response is obtained
        backoff_base: First transport retry delay in seconds (doubles each time)
        backoff_max: Upper bound of the transport retry delay in seconds
        debug: Log every request at INFO level
    """

    store_hash: str = ""
    token: str = ""
    base_url: str = ""
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    concurrency: int = DEFAULT_CONCURRENCY
    delete_limit: int = DEFAULT_DELETE_LIMIT
    max_transport_attempts: int = 3
    backoff_base: float = 0.5
    backoff_max: float = 8.0
    debug: bool = False
    extra_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration and derive base_url."""
        if not self.base_url:
            if not self.store_hash:
                raise ValueError("ClientConfig needs either store_hash or base_url")
            object.__setattr__(self, "base_url", get_base_url(self.store_hash))
        if self.max_attempts < 0:
            raise ValueError("max_attempts cannot be negative")
        if self.max_transport_attempts < 0:
            raise ValueError("max_transport_attempts cannot be negative")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if self.delete_limit < 1:
            raise ValueError("delete_limit must be at least 1")

    @property
    def headers(self) -> dict[str, str]:
        """Default headers sent with every request."""
        headers = {
            "X-Auth-Token": self.token,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        headers.update(self.extra_headers)
        return headers

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides: Any) -> ClientConfig:
        """Build a config from ``BC_*`` environment variables.

        Explicit keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {
            "store_hash": env.get("BC_STORE_HASH", ""),
            "token": env.get("BC_STORE_TOKEN", ""),
            "base_url": env.get("BC_BASE_URL", ""),
            "debug": env.get("BC_DEBUG", "").lower() in ("1", "true", "yes"),
        }
        int_fields = {
            "BC_MAX_ATTEMPTS": "max_attempts",
            "BC_TIMEOUT_MS": "timeout_ms",
            "BC_CONCURRENCY": "concurrency",
            "BC_DELETE_LIMIT": "delete_limit",
        }
        for var, name in int_fields.items():
            if env.get(var):
                values[name] = int(env[var])
        values.update(overrides)
        return cls(**values)
