#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Command line access to rollups reports.

Run with:

```
cartesi-reports list [--input N] [--decode] [--json]
cartesi-reports get --input N [--report M] [--decode]
```

The endpoint comes from ``--url`` or ``READER_GRAPHQL_URL``.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Sequence

from .logging_config import configure_logging, get_logger
from .payload import payload_to_text
from .query_errors import ReaderError
from .reports import PartialReport, ReportQueryClient
from .settings import load_settings

logger = get_logger(__name__)


def _render_table(reports: List[PartialReport], decode: bool) -> str:
    rows = [("index", "input", "payload")]
    for report in reports:
        payload = payload_to_text(report.payload) if decode else report.payload
        rows.append((str(report.index), str(report.input_index), payload))

    widths = [max(len(row[col]) for row in rows) for col in range(2)]
    lines = []
    for idx, (index, input_index, payload) in enumerate(rows):
        lines.append(f"{index:<{widths[0]}} | {input_index:<{widths[1]}} | {payload}")
        if idx == 0:
            lines.append(f"{'-' * widths[0]}-+-{'-' * widths[1]}-+-{'-' * 7}")
    return "\n".join(lines)


def _report_to_json(report: Dict[str, Any], decode: bool) -> Dict[str, Any]:
    if not decode:
        return report
    rendered = dict(report)
    rendered["payload"] = payload_to_text(report.get("payload") or "")
    return rendered


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cartesi-reports",
        description="Query reports from a rollups reader GraphQL endpoint",
    )
    parser.add_argument("--url", help="GraphQL endpoint (default: READER_GRAPHQL_URL)")

    payload_opts = argparse.ArgumentParser(add_help=False)
    payload_opts.add_argument(
        "--decode",
        action="store_true",
        help="Show payloads as UTF-8 text when possible",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", parents=[payload_opts], help="List reports")
    list_cmd.add_argument("--input", type=int, dest="input_index", help="Only reports of this input")
    list_cmd.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    get_cmd = sub.add_parser(
        "get", parents=[payload_opts], help="Fetch a single report (with retries)"
    )
    get_cmd.add_argument("--input", type=int, dest="input_index", required=True)
    get_cmd.add_argument("--report", type=int, dest="report_index", default=0)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(level=settings.log_level, log_file=settings.log_path)

    url = args.url or settings.graphql_url
    try:
        with ReportQueryClient(
            url, timeout=settings.timeout, retry=settings.report_retry
        ) as client:
            if args.command == "list":
                reports = client.list_reports(args.input_index)
                if args.json:
                    payload = [
                        _report_to_json(r.to_dict(), args.decode) for r in reports
                    ]
                    print(json.dumps(payload, indent=2, ensure_ascii=False))
                elif reports:
                    print(_render_table(reports, args.decode))
                else:
                    print("No reports")
            else:
                report = client.get_report(args.input_index, args.report_index)
                print(json.dumps(_report_to_json(report, args.decode), indent=2, ensure_ascii=False))
    except (ReaderError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
