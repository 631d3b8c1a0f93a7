"""Section state machine turning a report body into InterfaceRecords."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from arubaexporter.parsing.coercion import COERCERS, set_field
from arubaexporter.parsing.models import DeviceKind, FieldIssue, InterfaceRecord, ParseResult, ReportKind
from arubaexporter.parsing.registry import Role, get_rule_set


@dataclass
class _Accumulator:
    """The record currently being built.

    ``name`` stays None until a boundary line is seen; such a placeholder
    is empty and is never emitted.
    """

    name: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.name is None

    def finalize(self) -> InterfaceRecord:
        assert self.name is not None
        return InterfaceRecord(name=self.name, **self.fields)


def parse(device_kind: DeviceKind | str, report_kind: ReportKind | str, text: str) -> ParseResult:
    """Split one CLI report into per-port or per-VLAN records.

    Each line is matched against the rule set for the given kinds; only the
    first matching rule is applied. A boundary line closes the current
    record and opens a new one named by its capture. Field lines set
    attributes on the current record, later lines overriding earlier ones.
    Field lines seen before the first boundary are dropped.

    The call keeps no state between invocations and is safe to run
    concurrently for different devices.

    Args:
        device_kind: Kind of device the report came from.
        report_kind: Which report the text is.
        text: Verbatim command output.

    Returns:
        ParseResult holding the records in input order and any field
        coercion issues.

    Raises:
        UnsupportedKindError: If no rule set exists for the kinds.
    """
    rule_set = get_rule_set(device_kind, report_kind)
    logger.debug(f"Parsing {rule_set.report_kind.value} report for {rule_set.device_kind.value} ({len(text)} bytes)")

    records: list[InterfaceRecord] = []
    issues: list[FieldIssue] = []
    current = _Accumulator()
    dropped = 0

    for line in text.splitlines():
        hit = rule_set.classify(line)
        if hit is None:
            continue
        rule, captures = hit

        if rule.role is Role.BOUNDARY:
            if not current.is_empty:
                records.append(current.finalize())
            current = _Accumulator(name=COERCERS["name"](captures[0]))
            continue

        if current.is_empty:
            dropped += 1
            continue

        for attribute, raw in zip(rule.targets, captures):
            issue = set_field(current.fields, current.name or "", attribute, raw)
            if issue is not None:
                issues.append(issue)

    if not current.is_empty:
        records.append(current.finalize())

    if dropped:
        logger.debug(f"Dropped {dropped} field line(s) seen before the first section")
    logger.debug(f"Parsed {len(records)} record(s), {len(issues)} field issue(s)")

    return ParseResult(
        device_kind=rule_set.device_kind,
        report_kind=rule_set.report_kind,
        records=records,
        issues=issues,
    )


def parse_ports(device_kind: DeviceKind | str, text: str) -> ParseResult:
    """Parse a port-counter report."""
    return parse(device_kind, ReportKind.PORT_COUNTERS, text)


def parse_vlans(device_kind: DeviceKind | str, text: str) -> ParseResult:
    """Parse a vlan-traffic report."""
    return parse(device_kind, ReportKind.VLAN_TRAFFIC, text)
