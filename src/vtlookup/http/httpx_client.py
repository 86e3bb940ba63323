# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from ..log import TRACE_LOGGER_NAME
from .client import HttpClient
from .models import HttpRequest, HttpResponse, ResponseAccumulator
from .url import redact_text, redact_url

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger(TRACE_LOGGER_NAME)


def format_header_block(http_version: str, status_code: int, reason: str, items: Iterable[tuple[str, str]]) -> str:
    """Render a status line plus ``Name: value`` lines, CRLF separated."""
    status_line = f"{http_version} {status_code} {reason}".strip()
    lines = [status_line]
    lines.extend(f"{name}: {value}" for name, value in items)
    return "\r\n".join(lines) + "\r\n"


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper. Single attempt per request, no retries."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        verbose = request.verbose or self.settings.verbose
        safe_url = redact_url(request.url)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        if verbose:
            trace_logger.info("> %s %s", request.method, safe_url)
            for name, value in headers.items():
                trace_logger.info("> %s: %s", name, value)

        accumulator = ResponseAccumulator(self.settings.max_body_bytes)
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            ) as resp:
                header_text = format_header_block(
                    resp.http_version,
                    resp.status_code,
                    resp.reason_phrase,
                    resp.headers.multi_items(),
                )
                if verbose:
                    for line in header_text.splitlines():
                        trace_logger.info("< %s", redact_text(line))

                for chunk in resp.iter_bytes():
                    accumulator.feed(chunk)
                content = accumulator.finish()

                encoding = resp.encoding or "utf-8"
                try:
                    text = content.decode(encoding, errors="replace")
                except LookupError:
                    text = content.decode("utf-8", errors="replace")

            if verbose:
                trace_logger.info(
                    "< body: %d bytes in %d chunks%s",
                    len(content),
                    accumulator.chunks,
                    " (truncated)" if accumulator.truncated else "",
                )

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                header_text=header_text,
                text=text,
                content=content,
                url=redact_url(str(resp.url)),
                meta={
                    "body_truncated": accumulator.truncated,
                    "body_bytes_read": len(content),
                    "body_chunks": accumulator.chunks,
                    "body_bytes_limit": self.settings.max_body_bytes,
                },
            )
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            message = redact_text(str(exc) or type(exc).__name__)
            logger.debug("GET %s failed (%s): %s", safe_url, category.value, message)
            if verbose:
                trace_logger.info("* request failed: %s: %s", type(exc).__name__, message)
            return HttpResponse(
                ok=False,
                url=safe_url,
                error_message=message,
                error_type=type(exc).__name__,
                error_category=category,
                meta={"body_bytes_read": len(accumulator)},
            )

    def close(self) -> None:
        self._client.close()
