# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for vtlookup."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("VTLOOKUP_LOG_LEVEL", "WARNING").upper()
TRACE_LOGGER_NAME = "vtlookup.http.trace"


def setup_logging(level: str | None = None, *, trace: bool = False) -> None:
    """Configure standard logging for CLI/library use.

    ``trace`` lowers the protocol trace logger to INFO so verbose requests are visible
    even when the root level stays at WARNING.
    """
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if trace:
        logging.getLogger(TRACE_LOGGER_NAME).setLevel(logging.INFO)


__all__ = ["TRACE_LOGGER_NAME", "setup_logging"]
