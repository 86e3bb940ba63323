# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Report parsing exports."""

from .parser import decode_document, parse_engine_scan, parse_report, parse_report_text

__all__ = ["decode_document", "parse_engine_scan", "parse_report", "parse_report_text"]
