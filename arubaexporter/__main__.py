"""Orchestrator CLI: dispatches to sub-CLIs.

Sub-commands:
  serve   Run the Prometheus exporter (scrape switches over SSH)
  parse   Parse saved CLI output offline and print the records

Examples:
  arubaexporter serve --ssh.targets 10.0.0.1 --ssh.user monitor --ssh.password <PW>

  arubaexporter parse --report vlan-traffic show_interfaces_vlan.txt
"""

from __future__ import annotations

import os
import sys

from tabulate import tabulate

from arubaexporter import __version__, configure_logging
from arubaexporter import glogger

COMMANDS = {
    "serve": ("arubaexporter.exporter.cli", "Run the metrics exporter"),
    "parse": ("arubaexporter.parsing.cli", "Parse saved CLI output"),
}


def _print_usage() -> None:
    print("usage: arubaexporter <command> [options]\n")
    print("Available commands:")
    for cmd, (_, desc) in COMMANDS.items():
        print(f"  {cmd:14s}  {desc}")
    print("\nRun 'arubaexporter <command> --help' for command-specific options.")


def _print_startup_banner() -> None:
    startup_rows = [["version", __version__]]

    for var in ("GITHUB_REF", "GITHUB_SHA", "BUILDTIME"):
        val = os.environ.get(var)
        if val and not val.endswith("_is_undefined"):
            startup_rows.append([var, val])

    table_str = tabulate(startup_rows, tablefmt="mixed_grid")
    lines = table_str.split("\n")
    table_width = len(lines[0])
    title = "arubaexporter starting up"
    title_border = "┍" + "━" * (table_width - 2) + "┑"
    title_row = "│ " + title.center(table_width - 4) + " │"
    separator = lines[0].replace("┍", "┝").replace("┑", "┥").replace("┯", "┿")

    glogger.opt(raw=True).info(
        "\n{}\n", title_border + "\n" + title_row + "\n" + separator + "\n" + "\n".join(lines[1:])
    )


def main() -> None:
    """Main entry point: dispatch to sub-CLI."""
    configure_logging()
    _print_startup_banner()

    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        _print_usage()
        sys.exit(0 if len(sys.argv) >= 2 else 1)

    command = sys.argv[1]
    if command not in COMMANDS:
        print(f"arubaexporter: unknown command '{command}'\n", file=sys.stderr)
        _print_usage()
        sys.exit(1)

    module_path, _ = COMMANDS[command]

    # Import and call the sub-CLI's main(), passing remaining args
    from importlib import import_module

    module = import_module(module_path)
    module.main(sys.argv[2:])


if __name__ == "__main__":
    main()
