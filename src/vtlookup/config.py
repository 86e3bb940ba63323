# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for vtlookup."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"vtlookup/{__version__}"
DEFAULT_BASE_URL = "https://www.virustotal.com/vtapi/v2/file/report"
API_KEY_ENV = "VTLOOKUP_API_KEY"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP client and endpoint defaults."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024
    verbose: bool = False
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("VTLOOKUP_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        timeout = _float_env("VTLOOKUP_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("VTLOOKUP_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("VTLOOKUP_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("VTLOOKUP_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
            verbose=_bool_env("VTLOOKUP_HTTP_VERBOSE", cls.verbose),
            base_url=os.getenv("VTLOOKUP_BASE_URL") or cls.base_url,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_api_key() -> str | None:
    """Return the API key from the environment, or None when unset or blank."""
    value = (os.getenv(API_KEY_ENV) or "").strip()
    return value or None
