"""Prometheus exporter for Aruba switches.

Runs vendor CLI ``show`` commands over SSH and turns the free-form report
text into typed per-port / per-VLAN records for exposition.
"""

__version__ = "0.0.1"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    level: str | None = None,
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter.

    ``level`` wins over ``LOGURU_LEVEL``; without either, INFO is used.
    """
    os.environ["LOGURU_LEVEL"] = (level or os.getenv("LOGURU_LEVEL", "INFO")).upper()
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


from arubaexporter.exceptions import (  # noqa: E402
    AuthenticationError,
    ConfigError,
    ExporterError,
    FieldCoercionError,
    RuleSetError,
    SSHError,
    UnsupportedKindError,
)
from arubaexporter.parsing import (  # noqa: E402
    DeviceKind,
    InterfaceRecord,
    LinkStatus,
    ParseResult,
    ReportKind,
    parse,
)

__all__ = [
    "glogger",
    "configure_logging",
    "parse",
    "DeviceKind",
    "ReportKind",
    "LinkStatus",
    "InterfaceRecord",
    "ParseResult",
    "ExporterError",
    "UnsupportedKindError",
    "RuleSetError",
    "FieldCoercionError",
    "ConfigError",
    "SSHError",
    "AuthenticationError",
]
