"""Exporter: SSH scraping, metric mapping and HTTP exposition."""

from arubaexporter.exporter.collector import ArubaCollector, DeviceScrape
from arubaexporter.exporter.config import Config, DeviceConfig, FeatureConfig, load_config
from arubaexporter.exporter.server import ExporterApp, serve
from arubaexporter.exporter.transport import ArubaCLITransport, BaseTransport

__all__ = [
    "ArubaCollector",
    "DeviceScrape",
    "Config",
    "DeviceConfig",
    "FeatureConfig",
    "load_config",
    "ExporterApp",
    "serve",
    "ArubaCLITransport",
    "BaseTransport",
]
