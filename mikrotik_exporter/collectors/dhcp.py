"""DHCP lease collector."""

from __future__ import annotations

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import DEFAULT_NAMESPACE, MetricSample
from mikrotik_exporter.metrics.decoders import decode_flag, field, select_fallback

RESOURCE_PATH = "ip/dhcp-server/lease"

UNKNOWN_HOSTNAME = "unknown"


class DHCPCollector(Collector):
    name = "dhcp"

    def __init__(self, client: DeviceClient,
                 namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(client, namespace)
        self.bound = self._gauge(
            "dhcp_bound",
            "DHCP lease bound status (1 = bound, 0 = not bound)",
            ("device_ip", "mac", "dhcp_server", "device_hostname"),
        )

    async def collect(self, target: str, auth: AuthInfo) -> list[MetricSample]:
        leases = await self.client.fetch(target, RESOURCE_PATH, auth)
        samples: list[MetricSample] = []

        for lease in leases:
            # Active values win over the configured ones
            ip = select_fallback(field(lease, "active-address"), field(lease, "address"))
            mac = select_fallback(field(lease, "active-mac-address"),
                                  field(lease, "mac-address"))
            server = select_fallback(field(lease, "active-server"), field(lease, "server"))
            if ip is None or mac is None or server is None:
                continue
            hostname = field(lease, "host-name") or UNKNOWN_HOSTNAME

            samples.append(self.bound.sample(
                decode_flag(field(lease, "status"), "bound"),
                ip, mac, server, hostname,
            ))

        return samples
