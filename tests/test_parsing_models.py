"""Tests for parsing data models and enums."""

import pytest
from pydantic import ValidationError

from arubaexporter.parsing.models import (
    DeviceKind,
    FieldIssue,
    InterfaceRecord,
    LinkStatus,
    ParseResult,
    ReportKind,
)


class TestEnums:
    def test_device_kind_values(self):
        assert DeviceKind.ARUBA_SWITCH.value == "ArubaSwitch"
        assert DeviceKind.ARUBA_CONTROLLER.value == "ArubaController"
        assert DeviceKind.ARUBA_INSTANT.value == "ArubaInstant"

    def test_report_kind_values(self):
        assert ReportKind("port-counters") is ReportKind.PORT_COUNTERS
        assert ReportKind("vlan-traffic") is ReportKind.VLAN_TRAFFIC

    def test_link_status_values(self):
        assert [s.value for s in LinkStatus] == ["up", "down", "unknown"]


class TestInterfaceRecord:
    def test_defaults_are_absent(self):
        record = InterfaceRecord(name="1/1")
        assert record.name == "1/1"
        for attribute in InterfaceRecord.model_fields:
            if attribute != "name":
                assert getattr(record, attribute) is None
        assert record.present_fields() == {}

    def test_name_required(self):
        with pytest.raises(ValidationError):
            InterfaceRecord()

    def test_zero_counter_is_present(self):
        record = InterfaceRecord(name="1", rx_bytes=0.0)
        assert record.present_fields() == {"rx_bytes": 0.0}

    def test_equality(self):
        assert InterfaceRecord(name="1", rx_bytes=1.0) == InterfaceRecord(name="1", rx_bytes=1.0)
        assert InterfaceRecord(name="1", rx_bytes=1.0) != InterfaceRecord(name="1", rx_bytes=2.0)


class TestParseResult:
    def test_warnings_counts_issues(self):
        result = ParseResult(
            device_kind=DeviceKind.ARUBA_SWITCH,
            report_kind=ReportKind.PORT_COUNTERS,
            records=[InterfaceRecord(name="1"), InterfaceRecord(name="2")],
            issues=[FieldIssue(record="1", attribute="rx_bytes", raw="x", reason="bad")],
        )
        assert result.warnings == 1
        assert result.names() == ["1", "2"]

    def test_empty(self):
        result = ParseResult(device_kind=DeviceKind.ARUBA_SWITCH, report_kind=ReportKind.VLAN_TRAFFIC)
        assert result.records == []
        assert result.warnings == 0
