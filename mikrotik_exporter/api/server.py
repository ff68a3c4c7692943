"""FastAPI server — probe, self-metrics, health and help endpoints."""

from __future__ import annotations

import asyncio
import html
import logging
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from mikrotik_exporter import __version__
from mikrotik_exporter.collectors.registry import CollectorRegistry
from mikrotik_exporter.config.settings import Settings
from mikrotik_exporter.probe.errors import RequestValidationError
from mikrotik_exporter.probe.exposition import render
from mikrotik_exporter.probe.orchestrator import ProbeOrchestrator, ProbeResult
from mikrotik_exporter.probe.request import build_probe_request

logger = logging.getLogger(__name__)

DISCONNECT_POLL_INTERVAL = 0.5

INDEX_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <title>MikroTik Prometheus Exporter</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 40px; }}
        .container {{ max-width: 800px; }}
        .endpoint {{ background: #f5f5f5; padding: 10px; margin: 10px 0; border-radius: 5px; }}
        code {{ background: #e8e8e8; padding: 2px 4px; border-radius: 3px; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>MikroTik Prometheus Exporter</h1>
        <p>Prometheus metrics for MikroTik devices, collected through the REST API.</p>

        <h2>Usage</h2>
        <div class="endpoint">
            <code>/probe?target=&lt;ip:port&gt;&amp;auth=&lt;auth_name&gt;&amp;module=&lt;module_name&gt;</code>
        </div>
        <ul>
            <li><strong>target</strong> (required): address and port of the device (e.g. 192.168.88.1:80)</li>
            <li><strong>auth</strong> (optional): auth profile name (default: "default")</li>
            <li><strong>module</strong> (optional): module name (default: "default")</li>
        </ul>

        <h3>Available collectors</h3>
        <ul>
{collectors}
        </ul>

        <h3>Other endpoints</h3>
        <div class="endpoint"><code>/metrics</code> - exporter process metrics</div>
        <div class="endpoint"><code>/health-check</code> - health check (JSON)</div>
    </div>
</body>
</html>
"""


async def _run_until_disconnect(request: Request, probe: asyncio.Task) -> ProbeResult | None:
    """Await *probe*, cancelling it if the HTTP client goes away."""
    try:
        while True:
            done, _ = await asyncio.wait({probe}, timeout=DISCONNECT_POLL_INTERVAL)
            if done:
                return probe.result()
            if await request.is_disconnected():
                logger.info("Client disconnected, cancelling probe")
                return None
    finally:
        if not probe.done():
            probe.cancel()
            await asyncio.gather(probe, return_exceptions=True)


def create_api_app(settings: Settings, registry: CollectorRegistry,
                   orchestrator: ProbeOrchestrator) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="MikroTik Exporter",
        description="Multi-target Prometheus exporter for MikroTik RouterOS",
        version=__version__,
    )

    @app.get("/probe")
    async def probe(
        request: Request,
        target: str | None = None,
        auth: str | None = None,
        module: str | None = None,
    ) -> Response:
        try:
            probe_request = build_probe_request(settings, registry, target, auth, module)
        except RequestValidationError as exc:
            logger.info("Rejected probe of %s: %s", target or "<none>", exc)
            return PlainTextResponse(str(exc), status_code=400)

        task = asyncio.create_task(
            orchestrator.run(
                probe_request.target, probe_request.auth, probe_request.collectors,
            ),
            name=f"probe-{probe_request.target}",
        )
        result = await _run_until_disconnect(request, task)
        if result is None:
            # Nobody is left to read a body
            return Response(status_code=204)

        if result.failed:
            logger.info("Probe of %s (module %s): failed collectors %s",
                        result.target, probe_request.module, ", ".join(result.failed))
        return Response(content=render(result.samples), media_type=CONTENT_TYPE_LATEST)

    @app.get("/metrics")
    async def metrics() -> Response:
        return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health-check")
    async def health_check() -> dict[str, Any]:
        return {"status": "ok", "service": "mikrotik-exporter"}

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        items = "\n".join(
            f"            <li>{html.escape(name)}</li>" for name in registry.names()
        )
        return INDEX_TEMPLATE.format(collectors=items)

    return app
