"""RouterOS REST client — one authenticated GET per resource."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from mikrotik_exporter.device.errors import DeviceProtocolError, DeviceTransportError
from mikrotik_exporter.device.models import AuthInfo, ResourceRecord

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0


class DeviceClient:
    """Fetches resources from ``<scheme>://<target>/rest/<path>``.

    Every fetch opens its own short-lived ``httpx.AsyncClient``, so the
    client itself holds only configuration and is safe to share between
    concurrent probes.
    """

    def __init__(
        self,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
        scheme: str = "http",
        verify_tls: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.fetch_timeout = fetch_timeout
        self.scheme = scheme
        self.verify_tls = verify_tls
        self._transport = transport

    def resource_url(self, target: str, path: str) -> str:
        return f"{self.scheme}://{target}/rest/{path.lstrip('/')}"

    async def fetch(self, target: str, path: str,
                    auth: AuthInfo) -> list[ResourceRecord]:
        """Fetch a collection endpoint as a list of records.

        An object-shaped body is returned as a single-record list.
        """
        url = self.resource_url(target, path)
        body = await self._get_json(url, auth)
        if isinstance(body, dict):
            return [body]
        if isinstance(body, list) and all(isinstance(item, dict) for item in body):
            return body
        raise DeviceProtocolError(url, "expected a JSON array of objects")

    async def fetch_one(self, target: str, path: str,
                        auth: AuthInfo) -> ResourceRecord:
        """Fetch a scalar endpoint such as ``system/resource``."""
        url = self.resource_url(target, path)
        body = await self._get_json(url, auth)
        if isinstance(body, dict):
            return body
        if isinstance(body, list) and len(body) == 1 and isinstance(body[0], dict):
            return body[0]
        raise DeviceProtocolError(url, "expected a JSON object")

    async def _get_json(self, url: str, auth: AuthInfo) -> Any:
        logger.debug("GET %s", url)
        try:
            async with asyncio.timeout(self.fetch_timeout):
                async with httpx.AsyncClient(
                    auth=httpx.BasicAuth(auth.username, auth.password),
                    headers={"Accept": "application/json"},
                    timeout=self.fetch_timeout,
                    verify=self.verify_tls,
                    transport=self._transport,
                ) as client:
                    response = await client.get(url)
        except TimeoutError as exc:
            raise DeviceTransportError(
                url, f"no response within {self.fetch_timeout:g}s",
            ) from exc
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            raise DeviceTransportError(url, str(exc) or type(exc).__name__) from exc
        except httpx.HTTPError as exc:
            raise DeviceProtocolError(url, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise DeviceProtocolError(
                url, f"HTTP {response.status_code} {response.reason_phrase}",
            )
        try:
            return response.json()
        except ValueError as exc:
            raise DeviceProtocolError(url, f"invalid JSON body: {exc}") from exc
