"""BGP session collector."""

from __future__ import annotations

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import DEFAULT_NAMESPACE, MetricSample
from mikrotik_exporter.metrics.decoders import (
    decode_duration,
    decode_flag,
    decode_float,
    field,
)

RESOURCE_PATH = "routing/bgp/session"

SESSION_LABELS = ("name",)
INFO_FIELDS = (
    ("remote_address", "remote.address"),
    ("remote_id", "remote.id"),
    ("remote_as", "remote.as"),
    ("local_address", "local.address"),
    ("local_id", "local.id"),
    ("local_as", "local.as"),
)


class BGPCollector(Collector):
    name = "bgp"

    def __init__(self, client: DeviceClient,
                 namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(client, namespace)
        self.session_up = self._gauge(
            "bgp_session_up",
            "BGP session status (1 = established, 0 = not established)",
            SESSION_LABELS,
        )
        self.prefix_count = self._gauge(
            "bgp_session_prefix_count", "Number of prefixes in BGP session",
            SESSION_LABELS,
        )
        self.traffic = [
            ("remote.bytes", self._counter(
                "bgp_session_remote_bytes_total",
                "Total bytes received from remote BGP peer", SESSION_LABELS)),
            ("remote.messages", self._counter(
                "bgp_session_remote_messages_total",
                "Total messages received from remote BGP peer", SESSION_LABELS)),
            ("local.bytes", self._counter(
                "bgp_session_local_bytes_total",
                "Total bytes sent to remote BGP peer", SESSION_LABELS)),
            ("local.messages", self._counter(
                "bgp_session_local_messages_total",
                "Total messages sent to remote BGP peer", SESSION_LABELS)),
        ]
        self.uptime = self._gauge(
            "bgp_session_uptime", "BGP session uptime in seconds", SESSION_LABELS,
        )
        self.info = self._gauge(
            "bgp_session_info", "BGP session information",
            ("name", *(label for label, _ in INFO_FIELDS)),
        )

    async def collect(self, target: str, auth: AuthInfo) -> list[MetricSample]:
        sessions = await self.client.fetch(target, RESOURCE_PATH, auth)
        samples: list[MetricSample] = []

        for session in sessions:
            name = field(session, "name")
            if not name:
                continue
            labels = (name,)

            samples.append(self.session_up.sample(
                decode_flag(field(session, "established")), *labels,
            ))
            self._emit(samples, self.prefix_count,
                       decode_float(field(session, "prefix-count")), labels)
            for key, descriptor in self.traffic:
                self._emit(samples, descriptor, decode_float(field(session, key)), labels)
            self._emit(samples, self.uptime,
                       decode_duration(field(session, "uptime")), labels)

            samples.append(self.info.sample(
                1, name, *(field(session, key) for _, key in INFO_FIELDS),
            ))

        return samples
