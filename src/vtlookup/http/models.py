# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across vtlookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    timeout: float | None = None
    allow_redirects: bool = True
    verbose: bool = False


@dataclass
class HttpResponse:
    """Normalized HTTP response: status, raw header block and body."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    header_text: str = ""
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory = ErrorCategory.NONE
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success_status(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @property
    def has_body(self) -> bool:
        return bool(self.content or self.text)


class ResponseAccumulator:
    """
    Growable body buffer fed by the transport one chunk at a time.

    Chunks are appended in delivery order; the assembled body is only handed out by
    ``finish()``. Bytes beyond ``max_bytes`` are dropped and flagged as truncated.
    """

    def __init__(self, max_bytes: int | None = None):
        self._buffer = bytearray()
        self._max_bytes = max_bytes if max_bytes and max_bytes > 0 else None
        self.chunks = 0
        self.truncated = False
        self.finished = False

    def __len__(self) -> int:
        return len(self._buffer)

    def feed(self, chunk: bytes) -> int:
        """Append a chunk and return the number of bytes kept."""
        if self.finished:
            raise RuntimeError("ResponseAccumulator already finished")
        if not chunk:
            return 0
        self.chunks += 1
        if self._max_bytes is None:
            self._buffer.extend(chunk)
            return len(chunk)
        remaining = self._max_bytes - len(self._buffer)
        if remaining <= 0:
            self.truncated = True
            return 0
        if len(chunk) > remaining:
            self._buffer.extend(chunk[:remaining])
            self.truncated = True
            return remaining
        self._buffer.extend(chunk)
        return len(chunk)

    def finish(self) -> bytes:
        self.finished = True
        return bytes(self._buffer)


__all__ = ["Headers", "HttpRequest", "HttpResponse", "ResponseAccumulator"]
