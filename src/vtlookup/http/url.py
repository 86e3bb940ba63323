# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for the report endpoint."""

from __future__ import annotations

import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

SECRET_PARAMS = frozenset({"apikey", "api_key", "key"})
REDACTED = "***"
_SECRET_IN_TEXT_RE = re.compile(r"(?i)\b(apikey|api_key)=[^&\s#'\"]+")


def build_report_url(base_url: str, api_key: str, resource: str) -> str:
    """
    Embed the credential and resource as query parameters.

    Existing query parameters on ``base_url`` are kept ahead of the two added ones.
    """
    parts = urlsplit(str(base_url or ""))
    query = parse_qsl(parts.query, keep_blank_values=True)
    query = [(k, v) for k, v in query if k not in {"apikey", "resource"}]
    query.append(("apikey", api_key))
    query.append(("resource", resource))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), ""))


def redact_url(url: str) -> str:
    """Return ``url`` with credential query values replaced by ``***``."""
    raw = str(url or "")
    try:
        parts = urlsplit(raw)
    except ValueError:
        return raw
    if not parts.query:
        return raw
    query = [
        (k, REDACTED if k.lower() in SECRET_PARAMS else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query, safe="*"), parts.fragment))


def redact_text(text: str) -> str:
    """Mask credential query values wherever they appear in free text (exception messages)."""
    return _SECRET_IN_TEXT_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", str(text or ""))


__all__ = ["REDACTED", "build_report_url", "redact_text", "redact_url"]
