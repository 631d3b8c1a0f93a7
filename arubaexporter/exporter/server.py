"""HTTP exposition: WSGI app serving a landing page and the metrics path."""

from __future__ import annotations

from socketserver import ThreadingMixIn
from typing import Any, Callable, Iterable
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from loguru import logger
from prometheus_client import CollectorRegistry, make_wsgi_app

from arubaexporter import __version__
from arubaexporter.exporter.collector import ArubaCollector
from arubaexporter.exporter.config import Config

DEFAULT_LISTEN_ADDRESS = ":9909"
DEFAULT_METRICS_PATH = "/metrics"

LANDING_PAGE = """<html>
  <head>
    <title>Aruba Exporter (Version {version})</title>
  </head>
  <body>
    <h1>Aruba Exporter</h1>
    <p><a href="{metrics_path}">Metrics</a></p>
  </body>
</html>
"""

CollectorFactory = Callable[[Config], Any]


class ExporterApp:
    """WSGI application.

    Every request to the metrics path builds a fresh registry around a new
    collector, so scrapes never share state.
    """

    def __init__(
        self,
        config: Config,
        metrics_path: str = DEFAULT_METRICS_PATH,
        collector_factory: CollectorFactory = ArubaCollector,
    ) -> None:
        self.config = config
        self.metrics_path = metrics_path
        self._collector_factory = collector_factory

    def __call__(self, environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        path = environ.get("PATH_INFO") or "/"

        if path == self.metrics_path:
            registry = CollectorRegistry()
            registry.register(self._collector_factory(self.config))
            return make_wsgi_app(registry)(environ, start_response)

        if path == "/":
            body = LANDING_PAGE.format(version=__version__, metrics_path=self.metrics_path).encode()
            start_response("200 OK", [("Content-Type", "text/html; charset=utf-8")])
            return [body]

        start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
        return [b"Not Found\n"]


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _LoguruHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:
        logger.debug(f"{self.address_string()} - {format % args}")


def parse_listen_address(address: str) -> tuple[str, int]:
    """Split ``[host]:port`` into (host, port); an empty host binds all."""
    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"Invalid listen address '{address}' (expected [host]:port)")
    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)


def serve(app: ExporterApp, listen_address: str = DEFAULT_LISTEN_ADDRESS) -> None:
    """Serve ``app`` until interrupted."""
    host, port = parse_listen_address(listen_address)
    httpd = make_server(host, port, app, server_class=_ThreadingWSGIServer, handler_class=_LoguruHandler)
    logger.info(f"Listening for {app.metrics_path} on {listen_address}")
    try:
        httpd.serve_forever()
    finally:
        httpd.server_close()
