# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
vtlookup package entrypoint.

Client for the VirusTotal file report endpoint: fetch a report for a known
resource (hash or scan id), parse it into a typed ``Report`` with derived
detection statistics, and surface one explicit outcome per stage. HTTP
behavior sits behind an injectable client interface.
"""

from .config import HttpSettings, load_api_key, load_http_settings
from .digest import file_hexdigest, hexdigest, sha256_hexdigest
from .errors import ErrorCategory, Outcome
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    ResponseAccumulator,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import EngineScan, FetchResult, LoadResult, LookupResult, Report, ResponseCode
from .report import parse_report, parse_report_text
from .runtime import VirusTotalLookup
from .version import __version__

__all__ = [
    "EngineScan",
    "ErrorCategory",
    "FetchResult",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "LoadResult",
    "LookupResult",
    "Outcome",
    "Report",
    "ResponseAccumulator",
    "ResponseCode",
    "StubHttpClient",
    "VirusTotalLookup",
    "create_default_http_client",
    "file_hexdigest",
    "hexdigest",
    "load_api_key",
    "load_http_settings",
    "parse_report",
    "parse_report_text",
    "setup_logging",
    "sha256_hexdigest",
    "__version__",
]
