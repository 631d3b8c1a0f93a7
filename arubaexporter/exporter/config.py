"""Exporter configuration: pydantic models loaded from YAML or CLI flags."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from arubaexporter.exceptions import ConfigError
from arubaexporter.parsing.models import DeviceKind, ReportKind

DEFAULT_SSH_PORT = 22
PASSWORD_ENV = "SSH_PASSWORD"


class FeatureConfig(BaseModel):
    """Which reports are scraped from each device."""

    interfaces: bool = True
    vlans: bool = True

    def report_kinds(self) -> list[ReportKind]:
        kinds: list[ReportKind] = []
        if self.interfaces:
            kinds.append(ReportKind.PORT_COUNTERS)
        if self.vlans:
            kinds.append(ReportKind.VLAN_TRAFFIC)
        return kinds


class DeviceConfig(BaseModel):
    """One device to scrape. Unset credentials fall back to the globals."""

    host: str
    port: int = DEFAULT_SSH_PORT
    kind: DeviceKind = DeviceKind.ARUBA_SWITCH
    username: Optional[str] = None
    password: Optional[str] = None
    keyfile: Optional[str] = None

    @property
    def target(self) -> str:
        """Label value identifying the device in metrics."""
        return self.host if self.port == DEFAULT_SSH_PORT else f"{self.host}:{self.port}"


class Config(BaseModel):
    level: str = "info"
    timeout: int = 5
    batch_size: int = 10000
    username: str = "aruba_exporter"
    password: str = ""
    keyfile: str = ""
    devices: list[DeviceConfig] = Field(default_factory=list)
    features: FeatureConfig = Field(default_factory=FeatureConfig)

    def devices_from_targets(self, targets: str) -> None:
        """Append devices from a comma separated ``host[:port]`` list."""
        for entry in targets.split(","):
            entry = entry.strip()
            if not entry:
                continue
            host, port = entry, DEFAULT_SSH_PORT
            if entry.count(":") == 1:
                host, port_str = entry.split(":")
                try:
                    port = int(port_str)
                except ValueError:
                    raise ConfigError(f"Invalid port in target '{entry}'") from None
            self.devices.append(DeviceConfig(host=host, port=port))

    def credentials_for(self, device: DeviceConfig) -> tuple[str, str, str]:
        """Return (username, password, keyfile) for ``device``."""
        return (
            device.username or self.username,
            device.password if device.password is not None else self.password,
            device.keyfile or self.keyfile,
        )

    def apply_env(self) -> None:
        """Fill an empty password from the environment."""
        if not self.password and os.getenv(PASSWORD_ENV):
            logger.debug(f"Loaded password from {PASSWORD_ENV}")
            self.password = os.environ[PASSWORD_ENV]


def load_config(path: str | Path) -> Config:
    """Load a Config from a YAML file.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or does
            not describe a valid configuration.
    """
    logger.info(f"Loading config from {path}")
    try:
        raw = yaml.safe_load(Path(path).read_text())
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        config = Config.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    config.apply_env()
    return config
