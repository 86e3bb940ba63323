# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""vtlookup CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import API_KEY_ENV, HttpSettings, load_api_key, load_http_settings
from ..digest import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS, file_hexdigest
from ..errors import Outcome
from ..http import create_default_http_client
from ..log import setup_logging
from ..models import LookupResult, Report
from ..runtime import VirusTotalLookup

EXIT_OK = 0
EXIT_TRANSPORT_FAILURE = 1
EXIT_MALFORMED = 2
EXIT_USAGE = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Look up a VirusTotal file report by hash, scan id or local file")
    parser.add_argument("resource", nargs="?", help="Hash (MD5/SHA-1/SHA-256) or scan id to look up")
    parser.add_argument("-f", "--file", dest="file", help="Hash this file and look up the digest instead")
    parser.add_argument(
        "--algorithm",
        choices=SUPPORTED_ALGORITHMS,
        default=DEFAULT_ALGORITHM,
        help="Digest used with --file (default: %(default)s)",
    )
    parser.add_argument("--api-key", dest="api_key", help=f"API key (default: ${API_KEY_ENV})")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Trace the HTTP exchange (API key redacted)",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification",
    )
    return parser


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(report: Report) -> None:
    status = report.status
    status_label = status.name if status is not None else str(report.response_code)
    print(f"[vtlookup] Resource: {report.resource or '-'}")
    print(f"Status: {status_label}" + (f" ({report.verbose_msg})" if report.verbose_msg else ""))
    if not report.found:
        return
    if report.scan_date:
        print(f"Scan date: {report.scan_date}")
    if report.permalink:
        print(f"Permalink: {report.permalink}")
    for label, value in (("SHA-256", report.sha256), ("SHA-1", report.sha1), ("MD5", report.md5)):
        if value:
            print(f"{label}: {value}")
    print(f"Detections: {report.positives}/{report.scan_count} ({report.detection_ratio:.1%})")
    detections = report.detections
    if detections:
        print("Detected by:")
        for scan in detections:
            version = f" {scan.engine_version}" if scan.engine_version else ""
            print(f"- {scan.engine_name}{version}: {scan.description or 'detected'}")


def _exit_code(result: LookupResult) -> int:
    if result.fetch.outcome is Outcome.TRANSPORT_FAILURE:
        return EXIT_TRANSPORT_FAILURE
    if result.load is None or not result.load.ok:
        return EXIT_MALFORMED
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(trace=args.verbose)

    if bool(args.resource) == bool(args.file):
        parser.print_usage(sys.stderr)
        print("error: give exactly one of RESOURCE or --file", file=sys.stderr)
        return EXIT_USAGE

    api_key = args.api_key or load_api_key()
    if not api_key:
        print(f"error: no API key; pass --api-key or set {API_KEY_ENV}", file=sys.stderr)
        return EXIT_USAGE

    resource = args.resource
    if args.file:
        try:
            resource = file_hexdigest(args.file, args.algorithm)
        except OSError as exc:
            print(f"error: cannot read {args.file}: {exc}", file=sys.stderr)
            return EXIT_USAGE

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    if args.timeout is not None and args.timeout > 0:
        settings.timeout = args.timeout
    if args.verbose:
        settings.verbose = True

    http_client = create_default_http_client(settings)

    with VirusTotalLookup(api_key, http_client=http_client, settings=settings) as lookup:
        result = lookup.fetch_and_load_report(resource)

    code = _exit_code(result)
    if code == EXIT_TRANSPORT_FAILURE:
        print(f"error: {result.fetch.error_message}", file=sys.stderr)
        return code
    if result.load is None:
        print(f"error: empty response body (HTTP {result.fetch.status_code})", file=sys.stderr)
        return code
    if not result.load.ok:
        print(
            f"error: malformed response (HTTP {result.fetch.status_code}): {result.load.error_message}",
            file=sys.stderr,
        )
        return code

    if args.json:
        _print_json(result.report)
    else:
        _pretty_print(result.report)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
