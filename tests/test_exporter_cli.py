"""Tests for the exporter CLI (flag parsing and startup)."""

from __future__ import annotations

import pytest

from arubaexporter import __version__
from arubaexporter.exporter import cli
from arubaexporter.exporter.cli import build_parser, config_from_args


class TestBuildParser:
    def test_defaults(self):
        parsed = build_parser().parse_args([])
        assert parsed.listen_address == ":9909"
        assert parsed.metrics_path == "/metrics"
        assert parsed.targets == ""
        assert parsed.username == "aruba_exporter"
        assert parsed.timeout == 5
        assert parsed.batch_size == 10000
        assert parsed.level == "info"
        assert parsed.config_file == ""
        assert parsed.version is False

    def test_dotted_flags(self):
        parsed = build_parser().parse_args(
            [
                "--web.listen-address",
                "127.0.0.1:9100",
                "--web.telemetry-path",
                "/probe",
                "--ssh.targets",
                "sw1,sw2:2222",
                "--ssh.user",
                "monitor",
                "--ssh.keyfile",
                "/keys/id",
                "--ssh.timeout",
                "9",
                "--ssh.batch-size",
                "2048",
            ]
        )
        assert parsed.listen_address == "127.0.0.1:9100"
        assert parsed.metrics_path == "/probe"
        assert parsed.targets == "sw1,sw2:2222"
        assert parsed.username == "monitor"
        assert parsed.keyfile == "/keys/id"
        assert parsed.timeout == 9
        assert parsed.batch_size == 2048


class TestConfigFromArgs:
    def test_from_flags(self, monkeypatch):
        monkeypatch.setenv("SSH_PASSWORD", "from-env")
        parsed = build_parser().parse_args(["--ssh.targets", "sw1,sw2:2222", "--level", "debug"])

        config = config_from_args(parsed)

        assert [d.target for d in config.devices] == ["sw1", "sw2:2222"]
        assert config.level == "debug"
        assert config.password == "from-env"

    def test_config_file_wins(self, tmp_path):
        path = tmp_path / "exporter.yml"
        path.write_text("username: monitor\ndevices:\n  - host: core1\n")
        parsed = build_parser().parse_args(["--config.file", str(path), "--ssh.targets", "ignored"])

        config = config_from_args(parsed)

        assert config.username == "monitor"
        assert [d.host for d in config.devices] == ["core1"]


class TestMain:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--version"])
        assert exc.value.code == 0
        assert f"Version: {__version__}" in capsys.readouterr().out

    def test_bad_config_exits_1(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--config.file", str(tmp_path / "missing.yml")])
        assert exc.value.code == 1

    def test_serves_app(self, monkeypatch):
        served = {}

        def _serve(app, listen_address):
            served["app"] = app
            served["listen_address"] = listen_address

        monkeypatch.setattr(cli, "serve", _serve)

        cli.main(["--ssh.targets", "sw1", "--web.telemetry-path", "/probe", "--web.listen-address", ":9100"])

        assert served["listen_address"] == ":9100"
        assert served["app"].metrics_path == "/probe"
        assert [d.host for d in served["app"].config.devices] == ["sw1"]

    def test_listen_failure_exits_1(self, monkeypatch):
        def _serve(app, listen_address):
            raise OSError("Address already in use")

        monkeypatch.setattr(cli, "serve", _serve)

        with pytest.raises(SystemExit) as exc:
            cli.main([])
        assert exc.value.code == 1

    def test_interrupt_exits_130(self, monkeypatch):
        def _serve(app, listen_address):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "serve", _serve)

        with pytest.raises(SystemExit) as exc:
            cli.main([])
        assert exc.value.code == 130
