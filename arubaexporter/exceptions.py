"""Exception hierarchy for the exporter."""

from __future__ import annotations


class ExporterError(Exception):
    """Base exception for all exporter errors."""


class UnsupportedKindError(ExporterError):
    """No rule set is registered for the requested device / report kind."""

    def __init__(self, message: str, device_kind: object = None, report_kind: object = None):
        self.device_kind = device_kind
        self.report_kind = report_kind
        super().__init__(message)


class RuleSetError(ExporterError):
    """A rule set declaration is malformed."""


class FieldCoercionError(ExporterError):
    """A captured value could not be converted to the attribute's type."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class ConfigError(ExporterError):
    """Configuration could not be loaded or validated."""


class SSHError(ExporterError):
    """SSH connection or command execution failed."""


class AuthenticationError(SSHError):
    """SSH authentication failed."""
