# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Convert the service's JSON report document into a ``Report``.

The document shape is owned by the remote service, so field names are kept
exactly as the service sends them. Missing or mistyped fields fall back to the
empty-report defaults; only a document that is not a JSON object at all fails
the parse. Engine entries are handled one at a time and a malformed entry is
skipped without affecting the others.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from ..errors import Outcome
from ..models.report import EngineScan, Report
from ..models.results import LoadResult

logger = logging.getLogger(__name__)

# Top-level document fields -> Report attribute names.
STRING_FIELDS = {
    "resource": "resource",
    "permalink": "permalink",
    "scan_id": "scan_id",
    "scan_date": "scan_date",
    "sha256": "sha256",
    "sha1": "sha1",
    "md5": "md5",
    "verbose_msg": "verbose_msg",
}
COUNT_FIELDS = {
    "total": "scan_count",
    "positives": "positives",
}
RESPONSE_CODE_FIELD = "response_code"
SCANS_FIELD = "scans"

# Per-engine entry fields.
ENGINE_DETECTED = "detected"
ENGINE_VERSION = "version"
ENGINE_RESULT = "result"
ENGINE_UPDATE = "update"

_MISSING = object()


def _coerce_str(value: Any) -> str | None:
    """Scalar -> str, null -> "", anything else -> None (wrong type)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _coerce_int(value: Any, *, allow_negative: bool = False) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float) and value.is_integer():
        parsed = int(value)
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed < 0 and not allow_negative:
        return None
    return parsed


def parse_engine_scan(name: Any, entry: Any) -> EngineScan | None:
    """Build one EngineScan, or return None when the entry has an unexpected shape."""
    if not isinstance(entry, Mapping):
        return None
    detected = entry.get(ENGINE_DETECTED)
    if not isinstance(detected, bool):
        return None
    engine_name = _coerce_str(name)
    version = _coerce_str(entry.get(ENGINE_VERSION))
    description = _coerce_str(entry.get(ENGINE_RESULT))
    scan_date = _coerce_str(entry.get(ENGINE_UPDATE))
    if engine_name is None or version is None or description is None or scan_date is None:
        return None
    return EngineScan(
        engine_name=engine_name,
        engine_version=version,
        description=description,
        scan_date=scan_date,
        detected=detected,
    )


def _parse_engine_scans(scans: Any) -> tuple[list[EngineScan], int]:
    if scans is _MISSING or scans is None:
        return [], 0
    if not isinstance(scans, Mapping):
        logger.debug("Ignoring %r field of type %s", SCANS_FIELD, type(scans).__name__)
        return [], 0

    engine_scans: list[EngineScan] = []
    skipped = 0
    for name, entry in scans.items():
        scan = parse_engine_scan(name, entry)
        if scan is None:
            skipped += 1
            logger.debug("Skipping malformed engine entry %r", name)
            continue
        engine_scans.append(scan)
    return engine_scans, skipped


def parse_report(document: Any) -> LoadResult:
    """Parse a decoded JSON document. Never raises for bad input."""
    if not isinstance(document, Mapping):
        return LoadResult(
            outcome=Outcome.MALFORMED_DOCUMENT,
            error_message=f"Expected a JSON object, got {type(document).__name__}",
        )

    values: dict[str, Any] = {}
    for key, attr in STRING_FIELDS.items():
        raw = document.get(key, _MISSING)
        if raw is _MISSING:
            continue
        value = _coerce_str(raw)
        if value is None:
            logger.debug("Ignoring %r field of type %s", key, type(raw).__name__)
            continue
        values[attr] = value

    for key, attr in COUNT_FIELDS.items():
        raw = document.get(key, _MISSING)
        if raw is _MISSING:
            continue
        count = _coerce_int(raw)
        if count is None:
            logger.debug("Ignoring %r field with value %r", key, raw)
            continue
        values[attr] = count

    raw_code = document.get(RESPONSE_CODE_FIELD, _MISSING)
    if raw_code is not _MISSING:
        code = _coerce_int(raw_code, allow_negative=True)
        if code is None:
            logger.debug("Ignoring %r field with value %r", RESPONSE_CODE_FIELD, raw_code)
        else:
            values["response_code"] = code

    scan_count = values.get("scan_count", 0)
    positives = values.get("positives", 0)
    if positives > scan_count:
        logger.warning(
            "Report for %r claims %d positives out of %d engines; clamping positives",
            values.get("resource", ""),
            positives,
            scan_count,
        )
        values["positives"] = scan_count

    engine_scans, skipped = _parse_engine_scans(document.get(SCANS_FIELD, _MISSING))
    report = Report(engine_scans=tuple(engine_scans), **values)
    return LoadResult(outcome=Outcome.SUCCESS, report=report, skipped_engines=skipped)


def decode_document(raw: str | bytes | bytearray) -> Any:
    """Decode raw JSON text. Raises ValueError when it is not valid JSON or nests too deeply."""
    try:
        return json.loads(raw)
    except RecursionError as exc:
        raise ValueError("JSON nesting exceeds the recursion limit") from exc


def parse_report_text(raw: str | bytes | bytearray) -> LoadResult:
    """Decode raw JSON text and parse it; undecodable text is MALFORMED_INPUT."""
    try:
        document = decode_document(raw)
    except ValueError as exc:
        return LoadResult(outcome=Outcome.MALFORMED_INPUT, error_message=f"Invalid JSON: {exc}")
    return parse_report(document)


__all__ = ["decode_document", "parse_engine_scan", "parse_report", "parse_report_text"]
