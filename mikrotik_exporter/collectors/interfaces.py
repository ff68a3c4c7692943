"""Interface collector — link state, traffic counters, MTU."""

from __future__ import annotations

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import DEFAULT_NAMESPACE, MetricSample
from mikrotik_exporter.metrics.decoders import (
    decode_flag,
    decode_timestamp,
    decode_unsigned,
    field,
)

RESOURCE_PATH = "interface"

BASIC_LABELS = ("name", "type")
ALL_LABELS = ("mac", "name", "type", "comment")

# (device field, metric suffix, help)
COUNTER_FIELDS = (
    ("rx-byte", "interface_rx_bytes_total", "Number of bytes received on interface"),
    ("rx-packet", "interface_rx_packets_total", "Number of packets received on interface"),
    ("fp-rx-byte", "interface_fp_rx_bytes_total",
     "Number of fast path bytes received on interface"),
    ("fp-rx-packet", "interface_fp_rx_packets_total",
     "Number of fast path packets received on interface"),
    ("tx-byte", "interface_tx_bytes_total", "Number of bytes transmitted on interface"),
    ("tx-packet", "interface_tx_packets_total", "Number of packets transmitted on interface"),
    ("fp-tx-byte", "interface_fp_tx_bytes_total",
     "Number of fast path bytes transmitted on interface"),
    ("fp-tx-packet", "interface_fp_tx_packets_total",
     "Number of fast path packets transmitted on interface"),
    ("tx-queue-drop", "interface_tx_queue_drop_total",
     "Number of packets dropped from TX queue"),
    ("link-downs", "interface_link_downs_total", "Number of link down events"),
)


class InterfacesCollector(Collector):
    name = "interfaces"

    def __init__(self, client: DeviceClient,
                 namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(client, namespace)
        self.enabled = self._gauge(
            "interface_enabled",
            "Interface enabled status (1 = enabled, 0 = disabled)",
            BASIC_LABELS,
        )
        self.up = self._gauge(
            "interface_up",
            "Interface running status (1 = running, 0 = not running)",
            ALL_LABELS,
        )
        self.counters = [
            (key, self._counter(suffix, documentation, BASIC_LABELS))
            for key, suffix, documentation in COUNTER_FIELDS
        ]
        self.mtu = self._gauge("interface_mtu", "Interface MTU in bytes", BASIC_LABELS)
        self.last_link_up = self._gauge(
            "interface_last_link_up_time",
            "Last link up time (Unix timestamp)",
            BASIC_LABELS,
        )
        self.last_link_down = self._gauge(
            "interface_last_link_down_time",
            "Last link down time (Unix timestamp)",
            BASIC_LABELS,
        )

    async def collect(self, target: str, auth: AuthInfo) -> list[MetricSample]:
        records = await self.client.fetch(target, RESOURCE_PATH, auth)
        samples: list[MetricSample] = []

        for iface in records:
            name = field(iface, "name")
            if not name:
                continue
            basic = (name, field(iface, "type"))
            full = (field(iface, "mac-address"), name, field(iface, "type"),
                    field(iface, "comment"))

            # "disabled" is the negative flag; anything but "true" is enabled
            enabled = 1.0 - decode_flag(field(iface, "disabled"))
            samples.append(self.enabled.sample(enabled, *basic))
            samples.append(self.up.sample(decode_flag(field(iface, "running")), *full))

            for key, descriptor in self.counters:
                self._emit(samples, descriptor, decode_unsigned(field(iface, key)), basic)

            self._emit(samples, self.mtu, decode_unsigned(field(iface, "mtu")), basic)
            self._emit(samples, self.last_link_up,
                       decode_timestamp(field(iface, "last-link-up-time")), basic)
            self._emit(samples, self.last_link_down,
                       decode_timestamp(field(iface, "last-link-down-time")), basic)

        return samples
