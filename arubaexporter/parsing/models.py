"""Pydantic models and enums for parsed CLI reports."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DeviceKind(str, Enum):
    """Device families known to the exporter inventory."""

    ARUBA_SWITCH = "ArubaSwitch"
    ARUBA_CONTROLLER = "ArubaController"
    ARUBA_INSTANT = "ArubaInstant"


class ReportKind(str, Enum):
    """Shapes of CLI report understood by the parser."""

    PORT_COUNTERS = "port-counters"
    VLAN_TRAFFIC = "vlan-traffic"


class LinkStatus(str, Enum):
    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"


class InterfaceRecord(BaseModel):
    """One physical port or one VLAN interface, as read from a report.

    Everything but ``name`` is optional: ``None`` means no matching line
    was seen (or its value could not be coerced), which is not the same
    as a zero counter.
    """

    name: str
    description: Optional[str] = None
    mac_address: Optional[str] = None
    link_status: Optional[LinkStatus] = None
    port_enabled: Optional[bool] = None

    rx_bytes: Optional[float] = None
    tx_bytes: Optional[float] = None
    rx_unicast: Optional[float] = None
    tx_unicast: Optional[float] = None
    rx_broadcast_multicast: Optional[float] = None
    tx_broadcast_multicast: Optional[float] = None
    rx_drops: Optional[float] = None
    tx_drops: Optional[float] = None
    rx_errors: Optional[float] = None

    # vlan-traffic only
    input_bytes: Optional[float] = None
    output_bytes: Optional[float] = None
    input_packets: Optional[float] = None
    output_packets: Optional[float] = None

    def present_fields(self) -> dict[str, object]:
        """Attributes other than ``name`` that were actually set."""
        return self.model_dump(exclude={"name"}, exclude_none=True)


class FieldIssue(BaseModel):
    """A field line that matched but whose value could not be coerced."""

    record: str
    attribute: str
    raw: str
    reason: str


class ParseResult(BaseModel):
    """Records from one report plus the field issues absorbed on the way."""

    device_kind: DeviceKind
    report_kind: ReportKind
    records: list[InterfaceRecord] = Field(default_factory=list)
    issues: list[FieldIssue] = Field(default_factory=list)

    @property
    def warnings(self) -> int:
        return len(self.issues)

    def names(self) -> list[str]:
        return [r.name for r in self.records]
