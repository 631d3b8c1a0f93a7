"""CLI entry point for the metrics exporter: standalone-capable.

Examples:
  # Targets and credentials from flags
  arubaexporter serve --ssh.targets 10.0.0.1,10.0.0.2:2222 --ssh.user monitor --ssh.keyfile ~/.ssh/id_ed25519

  # Everything from a YAML config file; SSH_PASSWORD is used if it sets no password
  arubaexporter serve --config.file aruba_exporter.yml --web.listen-address :9909
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from arubaexporter import __version__, configure_logging
from arubaexporter.exceptions import ConfigError
from arubaexporter.exporter.config import Config, load_config
from arubaexporter.exporter.server import DEFAULT_LISTEN_ADDRESS, DEFAULT_METRICS_PATH, ExporterApp, serve


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the exporter."""
    parser = argparse.ArgumentParser(
        prog="arubaexporter serve",
        description="Prometheus exporter for Aruba switches (SSH CLI scraping)",
    )
    parser.add_argument("--version", action="store_true", help="Print version information.")
    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        default=DEFAULT_LISTEN_ADDRESS,
        help=f"Address on which to expose metrics and web interface (default: {DEFAULT_LISTEN_ADDRESS})",
    )
    parser.add_argument(
        "--web.telemetry-path",
        dest="metrics_path",
        default=DEFAULT_METRICS_PATH,
        help=f"Path under which to expose metrics (default: {DEFAULT_METRICS_PATH})",
    )
    parser.add_argument("--ssh.targets", dest="targets", default="", help="Comma separated host[:port] list to scrape")
    parser.add_argument(
        "--ssh.user",
        dest="username",
        default="aruba_exporter",
        help="Username to use when connecting to devices using ssh",
    )
    parser.add_argument("--ssh.keyfile", dest="keyfile", default="", help="Private key file for ssh authentication")
    parser.add_argument("--ssh.password", dest="password", default="", help="Password for ssh authentication")
    parser.add_argument("--ssh.timeout", dest="timeout", type=int, default=5, help="Timeout for SSH connection (s)")
    parser.add_argument("--ssh.batch-size", dest="batch_size", type=int, default=10000, help="SSH response batch size")
    parser.add_argument("--level", default="info", help="Logging level (default: info)")
    parser.add_argument("--config.file", dest="config_file", default="", help="Path to YAML config file")
    return parser


def config_from_args(parsed: argparse.Namespace) -> Config:
    """Build the Config from a config file if given, otherwise from flags."""
    if parsed.config_file:
        return load_config(parsed.config_file)

    logger.info("Loading config from flags")
    config = Config(
        level=parsed.level,
        timeout=parsed.timeout,
        batch_size=parsed.batch_size,
        username=parsed.username,
        password=parsed.password,
        keyfile=parsed.keyfile,
    )
    config.devices_from_targets(parsed.targets)
    config.apply_env()
    logger.debug(f"Config: {config.model_dump(exclude={'password'})}")
    return config


def print_version() -> None:
    print("aruba_exporter")
    print(f"Version: {__version__}")
    print("Metric exporter for Aruba switches")


def main(args: list[str] | None = None) -> None:
    """Main entry point for the exporter CLI."""
    parsed = build_parser().parse_args(args)

    if parsed.version:
        print_version()
        sys.exit(0)

    configure_logging(parsed.level)
    try:
        config = config_from_args(parsed)
    except ConfigError as e:
        logger.error(f"could not initialize exporter. {e}")
        sys.exit(1)
    configure_logging(config.level)

    if not config.devices:
        logger.warning("No devices configured; scrapes will be empty")

    logger.info(f"starting aruba_exporter (version: {__version__})")
    app = ExporterApp(config, metrics_path=parsed.metrics_path)
    try:
        serve(app, parsed.listen_address)
    except (OSError, ValueError) as e:
        logger.error(f"cannot listen on {parsed.listen_address}: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)
