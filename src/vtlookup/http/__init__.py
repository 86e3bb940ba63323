# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .httpx_client import HttpxClient, format_header_block
from .models import Headers, HttpRequest, HttpResponse, ResponseAccumulator
from .url import build_report_url, redact_text, redact_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "ResponseAccumulator",
    "StubHttpClient",
    "build_report_url",
    "create_default_http_client",
    "format_header_block",
    "redact_text",
    "redact_url",
]
