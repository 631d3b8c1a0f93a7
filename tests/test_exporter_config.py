"""Tests for exporter configuration loading."""

import pytest

from arubaexporter.exceptions import ConfigError
from arubaexporter.exporter.config import Config, DeviceConfig, FeatureConfig, load_config
from arubaexporter.parsing.models import DeviceKind, ReportKind


class TestConfigDefaults:
    def test_defaults(self):
        config = Config()
        assert config.level == "info"
        assert config.timeout == 5
        assert config.batch_size == 10000
        assert config.username == "aruba_exporter"
        assert config.password == ""
        assert config.devices == []
        assert config.features.report_kinds() == [ReportKind.PORT_COUNTERS, ReportKind.VLAN_TRAFFIC]

    def test_feature_toggles(self):
        assert FeatureConfig(vlans=False).report_kinds() == [ReportKind.PORT_COUNTERS]
        assert FeatureConfig(interfaces=False, vlans=False).report_kinds() == []


class TestDevicesFromTargets:
    def test_hosts_and_ports(self):
        config = Config()
        config.devices_from_targets("10.0.0.1, sw2:2222,,")

        assert [(d.host, d.port) for d in config.devices] == [("10.0.0.1", 22), ("sw2", 2222)]
        assert all(d.kind is DeviceKind.ARUBA_SWITCH for d in config.devices)

    def test_empty(self):
        config = Config()
        config.devices_from_targets("")
        assert config.devices == []

    def test_invalid_port(self):
        with pytest.raises(ConfigError, match="Invalid port"):
            Config().devices_from_targets("sw1:ssh")

    def test_target_label(self):
        assert DeviceConfig(host="sw1").target == "sw1"
        assert DeviceConfig(host="sw1", port=2222).target == "sw1:2222"


class TestCredentials:
    def test_global_credentials(self):
        config = Config(username="u", password="p", keyfile="/k")
        assert config.credentials_for(DeviceConfig(host="sw1")) == ("u", "p", "/k")

    def test_device_overrides(self):
        config = Config(username="u", password="p", keyfile="/k")
        device = DeviceConfig(host="sw1", username="admin", password="", keyfile="/other")
        assert config.credentials_for(device) == ("admin", "", "/other")

    def test_password_from_env(self, monkeypatch):
        monkeypatch.setenv("SSH_PASSWORD", "from-env")
        config = Config()
        config.apply_env()
        assert config.password == "from-env"

    def test_explicit_password_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("SSH_PASSWORD", "from-env")
        config = Config(password="explicit")
        config.apply_env()
        assert config.password == "explicit"


class TestLoadConfig:
    def test_load_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SSH_PASSWORD", raising=False)
        path = tmp_path / "config.yml"
        path.write_text(
            """
level: debug
timeout: 10
username: monitor
password: secret
devices:
  - host: 10.0.0.1
  - host: 10.0.0.2
    port: 2222
    kind: ArubaController
    username: admin
features:
  vlans: false
"""
        )
        config = load_config(path)

        assert config.level == "debug"
        assert config.timeout == 10
        assert config.username == "monitor"
        assert config.password == "secret"
        assert len(config.devices) == 2
        assert config.devices[1].kind is DeviceKind.ARUBA_CONTROLLER
        assert config.devices[1].username == "admin"
        assert config.features.report_kinds() == [ReportKind.PORT_COUNTERS]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_config(path).devices == []

    def test_env_password_applied(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SSH_PASSWORD", "from-env")
        path = tmp_path / "config.yml"
        path.write_text("devices:\n  - host: sw1\n")
        assert load_config(path).password == "from-env"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("devices: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_validation_error(self, tmp_path):
        path = tmp_path / "invalid.yml"
        path.write_text("devices:\n  - host: sw1\n    kind: Juniper\n")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path)
