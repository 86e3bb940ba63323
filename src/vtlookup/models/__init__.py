# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for vtlookup."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .report import EMPTY_REPORT, EngineScan, Report, ResponseCode
from .results import FetchResult, LoadResult, LookupResult

__all__ = [
    "EMPTY_REPORT",
    "EngineScan",
    "FetchResult",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "LoadResult",
    "LookupResult",
    "Report",
    "ResponseCode",
]
