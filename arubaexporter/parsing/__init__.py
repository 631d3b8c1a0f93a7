"""CLI report parsing: rule registry, coercion and section state machine."""

from arubaexporter.parsing.machine import parse, parse_ports, parse_vlans
from arubaexporter.parsing.models import (
    DeviceKind,
    FieldIssue,
    InterfaceRecord,
    LinkStatus,
    ParseResult,
    ReportKind,
)
from arubaexporter.parsing.registry import (
    Role,
    Rule,
    RuleSet,
    get_rule_set,
    list_rule_sets,
    register_rule_set,
    rule_sets_for,
)

__all__ = [
    "parse",
    "parse_ports",
    "parse_vlans",
    "DeviceKind",
    "ReportKind",
    "LinkStatus",
    "InterfaceRecord",
    "FieldIssue",
    "ParseResult",
    "Role",
    "Rule",
    "RuleSet",
    "get_rule_set",
    "list_rule_sets",
    "register_rule_set",
    "rule_sets_for",
]
