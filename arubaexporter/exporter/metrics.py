"""Mapping from InterfaceRecord attributes to Prometheus metric families."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from arubaexporter.parsing.models import InterfaceRecord, LinkStatus, ReportKind

RECORD_LABELS = ["target", "name"]
INFO_LABELS = ["target", "name", "description", "mac_address"]


class MetricType(str, Enum):
    COUNTER = "counter"
    GAUGE = "gauge"


def _link_up(value: LinkStatus) -> Optional[float]:
    if value is LinkStatus.UP:
        return 1.0
    if value is LinkStatus.DOWN:
        return 0.0
    return None


def _flag(value: bool) -> float:
    return 1.0 if value else 0.0


@dataclass(frozen=True)
class MetricDef:
    """One record attribute exposed as one metric family."""

    attribute: str
    name: str
    documentation: str
    type: MetricType = MetricType.COUNTER
    convert: Callable[[Any], Optional[float]] = float


PORT_METRICS: tuple[MetricDef, ...] = (
    MetricDef("link_status", "aruba_interface_link_up", "Link status (1 = up, 0 = down)", MetricType.GAUGE, _link_up),
    MetricDef("port_enabled", "aruba_interface_enabled", "Port administratively enabled", MetricType.GAUGE, _flag),
    MetricDef("rx_bytes", "aruba_interface_rx_bytes", "Bytes received"),
    MetricDef("tx_bytes", "aruba_interface_tx_bytes", "Bytes transmitted"),
    MetricDef("rx_unicast", "aruba_interface_rx_unicast_packets", "Unicast packets received"),
    MetricDef("tx_unicast", "aruba_interface_tx_unicast_packets", "Unicast packets transmitted"),
    MetricDef("rx_broadcast_multicast", "aruba_interface_rx_bcast_mcast_packets", "Broadcast/multicast packets received"),
    MetricDef(
        "tx_broadcast_multicast", "aruba_interface_tx_bcast_mcast_packets", "Broadcast/multicast packets transmitted"
    ),
    MetricDef("rx_drops", "aruba_interface_rx_drops", "Received packets discarded"),
    MetricDef("tx_drops", "aruba_interface_tx_drops", "Transmit packets dropped"),
    MetricDef("rx_errors", "aruba_interface_rx_errors", "Receive errors"),
)

VLAN_METRICS: tuple[MetricDef, ...] = (
    MetricDef("input_bytes", "aruba_vlan_input_bytes", "Bytes received on the VLAN interface"),
    MetricDef("output_bytes", "aruba_vlan_output_bytes", "Bytes sent on the VLAN interface"),
    MetricDef("input_packets", "aruba_vlan_input_packets", "Packets received on the VLAN interface"),
    MetricDef("output_packets", "aruba_vlan_output_packets", "Packets sent on the VLAN interface"),
)

METRICS_BY_REPORT: dict[ReportKind, tuple[MetricDef, ...]] = {
    ReportKind.PORT_COUNTERS: PORT_METRICS,
    ReportKind.VLAN_TRAFFIC: VLAN_METRICS,
}


def _new_family(definition: MetricDef) -> CounterMetricFamily | GaugeMetricFamily:
    if definition.type is MetricType.COUNTER:
        return CounterMetricFamily(definition.name, definition.documentation, labels=RECORD_LABELS)
    return GaugeMetricFamily(definition.name, definition.documentation, labels=RECORD_LABELS)


def build_record_families(
    report_kind: ReportKind, records_by_target: Iterable[tuple[str, list[InterfaceRecord]]]
) -> list[Metric]:
    """Build one family per metric definition, with a sample per record.

    Attributes that are unset on a record produce no sample. Families that
    end up without samples are omitted.
    """
    definitions = METRICS_BY_REPORT[report_kind]
    families = {d.name: _new_family(d) for d in definitions}
    info = GaugeMetricFamily("aruba_interface_info", "Interface description and MAC address", labels=INFO_LABELS)

    for target, records in records_by_target:
        for record in records:
            for d in definitions:
                value = getattr(record, d.attribute)
                if value is None:
                    continue
                converted = d.convert(value)
                if converted is None:
                    continue
                families[d.name].add_metric([target, record.name], converted)

            if report_kind is ReportKind.PORT_COUNTERS and (record.description or record.mac_address):
                info.add_metric([target, record.name, record.description or "", record.mac_address or ""], 1.0)

    result: list[Metric] = [f for f in families.values() if f.samples]
    if info.samples:
        result.append(info)
    return result
