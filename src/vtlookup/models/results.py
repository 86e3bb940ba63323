# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tagged per-stage results returned by the lookup facade."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import Outcome
from ..http.models import HttpResponse
from .report import Report


@dataclass
class FetchResult:
    """Outcome of one network fetch. ``document`` is only set by document fetches."""

    outcome: Outcome
    response: HttpResponse
    document: Any = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome.ok

    @property
    def status_code(self) -> int | None:
        return self.response.status_code


@dataclass
class LoadResult:
    """Outcome of one parse/load attempt. ``report`` is empty unless it succeeded."""

    outcome: Outcome
    report: Report = field(default_factory=Report)
    error_message: str | None = None
    skipped_engines: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome.ok


@dataclass
class LookupResult:
    """Fetch and load results kept apart; ``load`` is None when no load was attempted."""

    fetch: FetchResult
    load: LoadResult | None = None

    @property
    def ok(self) -> bool:
        return self.fetch.ok and self.load is not None and self.load.ok

    @property
    def report(self) -> Report:
        if self.load is None:
            return Report()
        return self.load.report

    @property
    def outcomes(self) -> tuple[Outcome, Outcome | None]:
        return (self.fetch.outcome, self.load.outcome if self.load is not None else None)
