# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory for report lookups."""

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    One blocking attempt per ``request``; implementations never retry.

    Transport failures come back as ``HttpResponse(ok=False)`` instead of raising, and any
    status code the server sends counts as ``ok=True``. ``HttpRequest.verbose`` asks for
    protocol tracing with credentials redacted; it must not change the response.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Build the httpx-backed client from ``settings`` (environment defaults otherwise)."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())
