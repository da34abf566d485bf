"""
Client configuration.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the back-office API."""

    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    token: Optional[str] = None

    @classmethod
    def from_env(cls, environ=None) -> "ClientConfig":
        """
        Build a config from ``BACKOFFICE_API_URL``, ``BACKOFFICE_API_TIMEOUT``
        and ``BACKOFFICE_API_TOKEN``.
        """
        environ = os.environ if environ is None else environ
        timeout = environ.get("BACKOFFICE_API_TIMEOUT")
        return cls(
            base_url=environ.get("BACKOFFICE_API_URL", DEFAULT_API_URL).rstrip("/"),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
            token=environ.get("BACKOFFICE_API_TOKEN") or None,
        )
