# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade for fetching and loading file reports."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from contextlib import suppress
from typing import Any

from .config import HttpSettings, load_http_settings
from .errors import Outcome, categorize_exception, error_category_to_reason
from .http.client import HttpClient, create_default_http_client
from .http.models import HttpRequest, HttpResponse
from .http.url import build_report_url, redact_text, redact_url
from .models import FetchResult, LoadResult, LookupResult, Report
from .report.parser import decode_document, parse_report, parse_report_text

logger = logging.getLogger(__name__)


class VirusTotalLookup:
    """
    Report lookup wrapper around a single HTTP client and one cached report.

    ``report`` holds the last successfully loaded report. It is reset to an empty
    ``Report`` before every load, so a failed load never leaves stale values behind.
    Instances are not safe for concurrent use; use one per thread.
    """

    def __init__(
        self,
        api_key: str,
        *,
        http_client: HttpClient | None = None,
        settings: HttpSettings | None = None,
    ):
        self.api_key = api_key
        self.http_settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self._report = Report()

    @property
    def report(self) -> Report:
        return self._report

    def build_url(self, resource: str) -> str:
        return build_report_url(self.http_settings.base_url, self.api_key, resource)

    def reset_report_data(self) -> None:
        self._report = Report()

    def fetch_report(self, resource: str, *, verbose: bool | None = None) -> FetchResult:
        """Single GET for ``resource``. Leaves the cached report untouched."""
        request = HttpRequest(
            url=self.build_url(resource),
            timeout=self.http_settings.timeout,
            allow_redirects=self.http_settings.allow_redirects,
            verbose=self.http_settings.verbose if verbose is None else verbose,
        )
        try:
            response = self.http_client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse(
                ok=False,
                url=redact_url(request.url),
                error_message=redact_text(str(exc)),
                error_type=exc.__class__.__name__,
                error_category=categorize_exception(exc),
            )
        if not response.ok:
            reason = error_category_to_reason(response.error_category) or "Request failed"
            logger.warning("Report request for %s failed: %s", redact_url(request.url), response.error_message)
            return FetchResult(
                outcome=Outcome.TRANSPORT_FAILURE,
                response=response,
                error_message=f"{reason}: {response.error_message}" if response.error_message else reason,
            )
        if not response.is_success_status:
            logger.info("Report request for %r returned HTTP %s", resource, response.status_code)
        return FetchResult(outcome=Outcome.SUCCESS, response=response)

    def fetch_report_document(self, resource: str, *, verbose: bool | None = None) -> FetchResult:
        """Fetch and decode the body as JSON; does not load it into ``report``."""
        result = self.fetch_report(resource, verbose=verbose)
        if not result.ok:
            return result
        try:
            result.document = decode_document(result.response.content or result.response.text)
        except ValueError as exc:
            result.outcome = Outcome.MALFORMED_INPUT
            result.error_message = f"Response body is not valid JSON (HTTP {result.response.status_code}): {exc}"
        return result

    def load_report(self, source: Mapping[str, Any] | str | bytes | bytearray | Any) -> LoadResult:
        """
        Load a report from a decoded document or from raw JSON text.

        Raw text that cannot be decoded yields ``MALFORMED_INPUT``; a decoded value that is
        not a JSON object yields ``MALFORMED_DOCUMENT``. Only success replaces ``report``.
        """
        self.reset_report_data()
        if isinstance(source, (str, bytes, bytearray)):
            result = parse_report_text(source)
        else:
            result = parse_report(source)
        if result.ok:
            self._report = result.report
            if result.skipped_engines:
                logger.info("Skipped %d malformed engine entries", result.skipped_engines)
        else:
            logger.warning("Report load failed (%s): %s", result.outcome.value, result.error_message)
        return result

    def fetch_and_load_report(self, resource: str, *, verbose: bool | None = None) -> LookupResult:
        """Fetch then load; each stage reports its own outcome."""
        self.reset_report_data()
        fetch = self.fetch_report(resource, verbose=verbose)
        if not fetch.ok:
            return LookupResult(fetch=fetch)
        if not fetch.response.has_body:
            logger.warning("Report request for %r returned an empty body (HTTP %s)", resource, fetch.response.status_code)
            return LookupResult(fetch=fetch)
        load = self.load_report(fetch.response.content or fetch.response.text)
        return LookupResult(fetch=fetch, load=load)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> VirusTotalLookup:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
