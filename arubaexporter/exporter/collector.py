"""Prometheus collector: scrapes all devices concurrently on each collect()."""

from __future__ import annotations

import concurrent.futures
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator

from loguru import logger
from prometheus_client.core import GaugeMetricFamily, Metric

from arubaexporter.exceptions import ExporterError, UnsupportedKindError
from arubaexporter.exporter.config import Config, DeviceConfig
from arubaexporter.exporter.metrics import build_record_families
from arubaexporter.exporter.transport import ArubaCLITransport, BaseTransport
from arubaexporter.parsing.machine import parse
from arubaexporter.parsing.models import ParseResult, ReportKind
from arubaexporter.parsing.registry import RuleSet, get_rule_set

TransportFactory = Callable[[DeviceConfig, Config], BaseTransport]

MAX_WORKERS = 20


def default_transport_factory(device: DeviceConfig, config: Config) -> BaseTransport:
    username, password, keyfile = config.credentials_for(device)
    return ArubaCLITransport(
        host=device.host,
        username=username,
        password=password,
        port=device.port,
        keyfile=keyfile,
        timeout=config.timeout,
        batch_size=config.batch_size,
    )


@dataclass
class DeviceScrape:
    """Outcome of scraping one device."""

    device: DeviceConfig
    up: bool = False
    duration: float = 0.0
    results: dict[ReportKind, ParseResult] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


class ArubaCollector:
    """Custom collector scraping every configured device per collect().

    Each device is fetched and parsed in its own worker; a device that
    cannot be reached, or a report that cannot be parsed, only affects
    its own samples.
    """

    def __init__(
        self,
        config: Config,
        transport_factory: TransportFactory = default_transport_factory,
        max_workers: int = MAX_WORKERS,
    ) -> None:
        self._config = config
        self._transport_factory = transport_factory
        self._max_workers = max_workers

    def _rule_sets(self, device: DeviceConfig, scrape: DeviceScrape) -> list[RuleSet]:
        rule_sets: list[RuleSet] = []
        for report_kind in self._config.features.report_kinds():
            try:
                rule_sets.append(get_rule_set(device.kind, report_kind))
            except UnsupportedKindError as e:
                logger.warning(f"{device.target}: {e}")
                scrape.errors.append(str(e))
        return rule_sets

    def scrape_device(self, device: DeviceConfig) -> DeviceScrape:
        """Connect to one device, run each report command and parse it."""
        scrape = DeviceScrape(device=device)
        start = time.time()

        rule_sets = self._rule_sets(device, scrape)
        if not rule_sets:
            scrape.duration = time.time() - start
            return scrape

        try:
            with self._transport_factory(device, self._config) as transport:
                for rule_set in rule_sets:
                    try:
                        output = transport.send_command(rule_set.command)
                        scrape.results[rule_set.report_kind] = parse(device.kind, rule_set.report_kind, output)
                    except ExporterError as e:
                        logger.error(f"{device.target}: '{rule_set.command}' failed: {e}")
                        scrape.errors.append(str(e))
                # Up only if at least one report came back
                scrape.up = bool(scrape.results)
        except ExporterError as e:
            logger.error(f"{device.target}: scrape failed: {e}")
            scrape.up = False
            scrape.errors.append(str(e))
        finally:
            scrape.duration = time.time() - start

        return scrape

    def scrape_all(self) -> list[DeviceScrape]:
        """Scrape every device in parallel; results keep config order."""
        devices = self._config.devices
        if not devices:
            return []

        scrapes: dict[int, DeviceScrape] = {}
        workers = min(self._max_workers, len(devices))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {pool.submit(self.scrape_device, d): i for i, d in enumerate(devices)}
            for future in concurrent.futures.as_completed(futures):
                idx = futures[future]
                try:
                    scrapes[idx] = future.result()
                except Exception as e:
                    logger.exception(f"{devices[idx].target}: unexpected scrape error: {e}")
                    scrapes[idx] = DeviceScrape(device=devices[idx], errors=[str(e)])

        return [scrapes[i] for i in range(len(devices))]

    def collect(self) -> Iterator[Metric]:
        scrapes = self.scrape_all()

        up = GaugeMetricFamily("aruba_up", "Whether the device could be scraped", labels=["target"])
        duration = GaugeMetricFamily(
            "aruba_collector_duration_seconds", "Time spent scraping the device", labels=["target"]
        )
        warnings = GaugeMetricFamily(
            "aruba_parse_warnings", "Field values that could not be parsed", labels=["target", "report"]
        )
        for s in scrapes:
            up.add_metric([s.device.target], 1.0 if s.up else 0.0)
            duration.add_metric([s.device.target], s.duration)
            for kind, result in s.results.items():
                warnings.add_metric([s.device.target, kind.value], float(result.warnings))

        yield up
        yield duration
        if warnings.samples:
            yield warnings

        for kind in ReportKind:
            pairs = [(s.device.target, s.results[kind].records) for s in scrapes if kind in s.results]
            if pairs:
                yield from build_record_families(kind, pairs)
