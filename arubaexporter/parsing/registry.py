"""Per-report line classification rules and the registry that holds them.

A rule set is plain data: an ordered tuple of rules, each pairing an
anchored pattern with the record attribute(s) its groups feed. The first
rule of every set is the boundary rule, which starts a new record and
supplies its name. Adding a field or a report kind means adding a rule
or a rule set here, never touching the state machine.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from arubaexporter.exceptions import RuleSetError, UnsupportedKindError
from arubaexporter.parsing.coercion import COERCERS
from arubaexporter.parsing.models import DeviceKind, ReportKind

E = TypeVar("E", bound=Enum)


class Role(str, Enum):
    BOUNDARY = "boundary"
    FIELD = "field"


@dataclass(frozen=True)
class Rule:
    """One line pattern and the attribute(s) its capture groups map to."""

    role: Role
    pattern: re.Pattern[str]
    targets: tuple[str, ...]

    @property
    def arity(self) -> int:
        return len(self.targets)

    def match(self, line: str) -> tuple[str, ...] | None:
        """Return the captured values if ``line`` matches, else None."""
        m = self.pattern.match(line)
        if m is None:
            return None
        return tuple(g if g is not None else "" for g in m.groups())


def boundary(pattern: str) -> Rule:
    return Rule(Role.BOUNDARY, re.compile(pattern), ("name",))


def field(pattern: str, *targets: str) -> Rule:
    return Rule(Role.FIELD, re.compile(pattern), targets)


@dataclass(frozen=True)
class RuleSet:
    """Ordered rules for one (device kind, report kind) pair."""

    device_kind: DeviceKind
    report_kind: ReportKind
    command: str
    rules: tuple[Rule, ...]

    def __post_init__(self) -> None:
        label = f"{self.device_kind.value}/{self.report_kind.value}"
        boundaries = [r for r in self.rules if r.role is Role.BOUNDARY]
        if len(boundaries) != 1:
            raise RuleSetError(f"{label}: expected exactly one boundary rule, got {len(boundaries)}")
        if self.rules[0].role is not Role.BOUNDARY:
            raise RuleSetError(f"{label}: boundary rule must come first")
        for rule in self.rules:
            if rule.pattern.groups != rule.arity:
                raise RuleSetError(
                    f"{label}: pattern {rule.pattern.pattern!r} has {rule.pattern.groups} groups "
                    f"for {rule.arity} targets"
                )
            unknown = [t for t in rule.targets if t not in COERCERS]
            if unknown:
                raise RuleSetError(f"{label}: unknown target attribute(s): {', '.join(unknown)}")

    @property
    def boundary(self) -> Rule:
        return self.rules[0]

    def classify(self, line: str) -> tuple[Rule, tuple[str, ...]] | None:
        """Return the first rule matching ``line`` with its captures."""
        for rule in self.rules:
            captures = rule.match(line)
            if captures is not None:
                return rule, captures
        return None


# ── pattern helpers ───────────────────────────────────────────────────

_VALUE = r"(\S+)"
_SKIP = r"\S+"


def _column(label: str, value: str = _VALUE) -> str:
    """``<label> : <value>`` with flexible spacing inside the label."""
    return re.escape(label).replace(r"\ ", r"\s+") + r"\s*:\s*" + value


def _line(*columns: str) -> str:
    """Anchor one or more columns as a whole indented line."""
    return r"^\s*" + r"\s+".join(columns) + r"\s*$"


# ── ArubaOS-Switch tables ─────────────────────────────────────────────

ARUBA_SWITCH_PORT_COUNTERS = RuleSet(
    device_kind=DeviceKind.ARUBA_SWITCH,
    report_kind=ReportKind.PORT_COUNTERS,
    command="show interfaces all",
    rules=(
        boundary(r"^\s*Status and Counters - Port Counters for port ([\w/-]+)\s*$"),
        field(_line(_column("Name", r"(.*?)")), "description"),
        field(_line(_column("MAC Address")), "mac_address"),
        field(_line(_column("Link Status")), "link_status"),
        field(_line(_column("Port Enabled")), "port_enabled"),
        field(_line(_column("Bytes Rx"), _column("Bytes Tx")), "rx_bytes", "tx_bytes"),
        field(_line(_column("Unicast Rx"), _column("Unicast Tx")), "rx_unicast", "tx_unicast"),
        field(
            _line(_column("Bcast/Mcast Rx"), _column("Bcast/Mcast Tx")),
            "rx_broadcast_multicast",
            "tx_broadcast_multicast",
        ),
        field(_line(_column("FCS Rx", _SKIP), _column("Drops Tx")), "tx_drops"),
        field(_line(_column("Total Rx Errors"), _column("Deferred Tx", _SKIP)), "rx_errors"),
        field(_line(_column("Discard Rx"), _column("Out Queue Len", _SKIP)), "rx_drops"),
    ),
)

ARUBA_SWITCH_VLAN_TRAFFIC = RuleSet(
    device_kind=DeviceKind.ARUBA_SWITCH,
    report_kind=ReportKind.VLAN_TRAFFIC,
    command="show interfaces vlan",
    rules=(
        boundary(r"^([a-zA-Z0-9/-]+\.[a-zA-Z0-9/-]+) \(:?\d+\).*$"),
        field(r"^\s*Total (\S+) packets, (\S+) bytes input.*$", "input_packets", "input_bytes"),
        field(r"^\s*Total (\S+) packets, (\S+) bytes output.*$", "output_packets", "output_bytes"),
    ),
)


# ── registry ──────────────────────────────────────────────────────────

_RULE_SETS: dict[tuple[DeviceKind, ReportKind], RuleSet] = {}


def register_rule_set(rule_set: RuleSet) -> RuleSet:
    """Register ``rule_set``, replacing any set for the same kinds."""
    _RULE_SETS[(rule_set.device_kind, rule_set.report_kind)] = rule_set
    return rule_set


def _as_kind(kind_cls: type[E], value: object) -> E | None:
    if isinstance(value, kind_cls):
        return value
    try:
        return kind_cls(value)
    except ValueError:
        return None


def get_rule_set(device_kind: DeviceKind | str, report_kind: ReportKind | str) -> RuleSet:
    """Look up the rule set for a device kind and report kind.

    Args:
        device_kind: DeviceKind or its string value (e.g. "ArubaSwitch").
        report_kind: ReportKind or its string value (e.g. "vlan-traffic").

    Returns:
        The registered RuleSet.

    Raises:
        UnsupportedKindError: If either kind is unknown or the pair has
            no registered rule set.
    """
    dk = _as_kind(DeviceKind, device_kind)
    rk = _as_kind(ReportKind, report_kind)
    rule_set = None
    if dk is not None and rk is not None:
        rule_set = _RULE_SETS.get((dk, rk))
    if rule_set is None:
        dk_label = dk.value if dk is not None else device_kind
        rk_label = rk.value if rk is not None else report_kind
        available = ", ".join(f"{d.value}/{r.value}" for d, r in list_rule_sets())
        raise UnsupportedKindError(
            f"'{rk_label}' is not implemented for {dk_label}. Available: {available}",
            device_kind=device_kind,
            report_kind=report_kind,
        )
    return rule_set


def list_rule_sets() -> list[tuple[DeviceKind, ReportKind]]:
    """Return the registered (device kind, report kind) pairs, sorted."""
    return sorted(_RULE_SETS, key=lambda k: (k[0].value, k[1].value))


def rule_sets_for(device_kind: DeviceKind | str) -> list[RuleSet]:
    """All rule sets registered for one device kind (possibly none)."""
    dk = _as_kind(DeviceKind, device_kind)
    return [_RULE_SETS[key] for key in list_rule_sets() if key[0] is dk]


register_rule_set(ARUBA_SWITCH_PORT_COUNTERS)
register_rule_set(ARUBA_SWITCH_VLAN_TRAFFIC)
