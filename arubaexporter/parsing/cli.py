"""CLI entry point for offline report parsing: standalone-capable.

Reads CLI output saved from a switch and prints the parsed records.

Examples:
  arubaexporter parse --report port-counters show_interfaces_all.txt
  arubaexporter parse --report vlan-traffic --device-kind ArubaSwitch vlans.txt
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from tabulate import tabulate

from arubaexporter import configure_logging
from arubaexporter.exceptions import UnsupportedKindError
from arubaexporter.parsing.machine import parse
from arubaexporter.parsing.models import DeviceKind, InterfaceRecord, ParseResult, ReportKind


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for offline parsing."""
    parser = argparse.ArgumentParser(
        prog="arubaexporter parse",
        description="Parse saved Aruba CLI output into interface records.",
    )
    parser.add_argument("file", help="File holding the command output ('-' for stdin)")
    parser.add_argument(
        "-r",
        "--report",
        choices=[k.value for k in ReportKind],
        default=ReportKind.PORT_COUNTERS.value,
        help="Report kind (default: port-counters)",
    )
    parser.add_argument(
        "-k",
        "--device-kind",
        default=DeviceKind.ARUBA_SWITCH.value,
        help="Device kind (default: ArubaSwitch)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser.parse_args(args)


def format_result(result: ParseResult) -> str:
    """Render records as a table, one row per record."""
    if not result.records:
        return "No records found"

    # Column order follows the model, restricted to attributes present somewhere.
    present: set[str] = set()
    for record in result.records:
        present.update(record.present_fields())
    columns = ["name"] + [f for f in InterfaceRecord.model_fields if f in present]

    rows = []
    for record in result.records:
        values = record.model_dump(mode="json")
        rows.append(["" if values[c] is None else values[c] for c in columns])

    return tabulate(rows, headers=columns, tablefmt="simple")


def main(args: list[str] | None = None) -> None:
    """Main entry point for offline parsing CLI."""
    parsed = parse_args(args)

    configure_logging("DEBUG" if parsed.verbose else "WARNING")

    try:
        text = sys.stdin.read() if parsed.file == "-" else Path(parsed.file).read_text(errors="replace")
    except OSError as e:
        print(f"Error: cannot read {parsed.file}: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        result = parse(parsed.device_kind, parsed.report, text)
    except UnsupportedKindError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(format_result(result))
    print(f"\n{len(result.records)} record(s), {result.warnings} warning(s)")
    for issue in result.issues:
        print(f"  {issue.record}: {issue.attribute}: {issue.reason}")
