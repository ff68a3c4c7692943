"""Application — wires configuration, collectors and the HTTP server."""

from __future__ import annotations

import logging

from mikrotik_exporter.api.server import create_api_app
from mikrotik_exporter.collectors.registry import build_default_registry
from mikrotik_exporter.config.settings import ServerConfig, load_config
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.probe.orchestrator import ProbeOrchestrator

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # One line per failed fetch comes from the orchestrator already
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


class Application:
    """Top-level application.

    Everything mutable (registry, descriptors, settings) is built here,
    before the server accepts its first request.
    """

    def __init__(self, server_config: ServerConfig) -> None:
        self.server_config = server_config
        self.settings = load_config(server_config.config_file)
        self.device_client = DeviceClient(
            fetch_timeout=server_config.fetch_timeout,
            scheme=server_config.scheme,
            verify_tls=server_config.verify_tls,
        )
        self.registry = build_default_registry(
            self.device_client, server_config.namespace,
        )
        self.orchestrator = ProbeOrchestrator(
            namespace=server_config.namespace,
            timeout=server_config.probe_timeout,
        )
        self.api = create_api_app(self.settings, self.registry, self.orchestrator)

    async def serve(self) -> None:
        """Run the HTTP server until interrupted."""
        import uvicorn

        cfg = self.server_config
        config = uvicorn.Config(
            self.api,
            host=cfg.listen_addr,
            port=cfg.listen_port,
            log_level="warning",
        )
        server = uvicorn.Server(config)
        logger.info("Starting MikroTik Prometheus Exporter on %s:%d",
                    cfg.listen_addr, cfg.listen_port)
        descriptors = self.registry.describe() + self.orchestrator.describe()
        logger.info("Available collectors (%d): %s", len(self.registry),
                    ", ".join(self.registry.names()))
        logger.debug("Metric families: %s", ", ".join(d.name for d in descriptors))
        await server.serve()
