# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Report and per-engine scan models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ResponseCode(IntEnum):
    """Service-level lookup status carried in ``response_code``."""

    QUEUED = -2
    NOT_FOUND = 0
    FOUND = 1


@dataclass(frozen=True)
class EngineScan:
    """One engine's verdict for the resource."""

    engine_name: str = ""
    engine_version: str = ""
    description: str = ""
    scan_date: str = ""
    detected: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "engine_name": self.engine_name,
            "engine_version": self.engine_version,
            "description": self.description,
            "scan_date": self.scan_date,
            "detected": self.detected,
        }


@dataclass(frozen=True)
class Report:
    """
    Parsed lookup result.

    ``negatives`` and ``detection_ratio`` are derived from ``scan_count`` and
    ``positives`` and never read from the service document. The parser keeps
    ``positives <= scan_count`` so that ``negatives + positives == scan_count``.
    """

    resource: str = ""
    permalink: str = ""
    scan_id: str = ""
    scan_date: str = ""
    sha256: str = ""
    sha1: str = ""
    md5: str = ""
    scan_count: int = 0
    positives: int = 0
    response_code: int = 0
    verbose_msg: str = ""
    engine_scans: tuple[EngineScan, ...] = field(default_factory=tuple)

    @property
    def negatives(self) -> int:
        if self.scan_count <= 0:
            return 0
        return self.scan_count - self.positives

    @property
    def detection_ratio(self) -> float:
        if self.scan_count <= 0:
            return 0.0
        return self.positives / self.scan_count

    @property
    def status(self) -> ResponseCode | None:
        try:
            return ResponseCode(self.response_code)
        except ValueError:
            return None

    @property
    def found(self) -> bool:
        return self.status is ResponseCode.FOUND

    @property
    def queued(self) -> bool:
        return self.status is ResponseCode.QUEUED

    @property
    def detections(self) -> list[EngineScan]:
        return [scan for scan in self.engine_scans if scan.detected]

    @property
    def is_empty(self) -> bool:
        return self == Report()

    def to_dict(self) -> dict[str, Any]:
        status = self.status
        return {
            "resource": self.resource,
            "permalink": self.permalink,
            "scan_id": self.scan_id,
            "scan_date": self.scan_date,
            "sha256": self.sha256,
            "sha1": self.sha1,
            "md5": self.md5,
            "response_code": self.response_code,
            "status": status.name if status is not None else None,
            "verbose_msg": self.verbose_msg,
            "scan_count": self.scan_count,
            "positives": self.positives,
            "negatives": self.negatives,
            "detection_ratio": self.detection_ratio,
            "engine_scans": [scan.to_dict() for scan in self.engine_scans],
        }


EMPTY_REPORT = Report()

__all__ = ["EMPTY_REPORT", "EngineScan", "Report", "ResponseCode"]
