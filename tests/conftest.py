"""Shared fixtures for the arubaexporter test suite."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from arubaexporter.exporter.config import Config, DeviceConfig

# ── report samples ────────────────────────────────────────────────────

PORT_REPORT = """\

 Status and Counters - Port Counters for port 1/1

  Name  : uplink
  MAC Address      : 001a1e-000001
  Link Status      : Up
  Port Enabled     : Yes
  Totals (Since boot or last clear) :
   Bytes Rx        : 1,234,567            Bytes Tx        : 7,654,321
   Unicast Rx      : 1000                 Unicast Tx      : 2000
   Bcast/Mcast Rx  : 30                   Bcast/Mcast Tx  : 40
  Errors (Since boot or last clear) :
   FCS Rx          : 1                    Drops Tx        : 2
   Alignment Rx    : 0                    Collisions Tx   : 0
   Runts Rx        : 0                    Late Colln Tx   : 0
   Giants Rx       : 0                    Excessive Colln : 0
   Total Rx Errors : 3                    Deferred Tx     : 0
  Others (Since boot or last clear) :
   Discard Rx      : 4                    Out Queue Len   : 0
   Unknown Protos  : 0
  Rates (5 minute weighted average) :
   Total Rx  (bps) : 0                    Total Tx  (bps) : 0

 Status and Counters - Port Counters for port 1/2

  Name  :
  MAC Address      : 001a1e-000002
  Link Status      : Down
  Port Enabled     : No
  Totals (Since boot or last clear) :
   Bytes Rx        : 0                    Bytes Tx        : 0
"""

VLAN_REPORT = """\
vlan10.1 (100) is up, line protocol is up
    Hardware is CPU Interface, Interface address is 00:0b:86:00:00:01
    Total 5 packets, 500 bytes input
    Total 6 packets, 600 bytes output
vlan20.1 (200) is down, line protocol is down
    Total 0 packets, 0 bytes input
"""


@pytest.fixture(autouse=True)
def _restore_loguru_level(monkeypatch):
    """configure_logging() writes LOGURU_LEVEL; keep it per-test."""
    monkeypatch.delenv("LOGURU_LEVEL", raising=False)


@pytest.fixture()
def port_report() -> str:
    return PORT_REPORT


@pytest.fixture()
def vlan_report() -> str:
    return VLAN_REPORT


# ── exporter fixtures ─────────────────────────────────────────────────


@pytest.fixture()
def mock_transport():
    """MagicMock transport usable as a context manager.

    ``send_command`` returns the port or VLAN sample depending on the command.
    """
    transport = MagicMock()
    transport.__enter__.return_value = transport

    def _send(command: str) -> str:
        return VLAN_REPORT if "vlan" in command else PORT_REPORT

    transport.send_command.side_effect = _send
    return transport


@pytest.fixture()
def sample_config():
    """Factory fixture returning a Config with customizable devices."""

    def _make(hosts: tuple[str, ...] = ("10.0.0.1",), **overrides):
        defaults = dict(
            username="monitor",
            password="secret",
            devices=[DeviceConfig(host=h) for h in hosts],
        )
        defaults.update(overrides)
        return Config(**defaults)

    return _make
