"""Wireless client collector — WiFi registration table."""

from __future__ import annotations

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import DEFAULT_NAMESPACE, MetricSample
from mikrotik_exporter.metrics.decoders import (
    decode_duration,
    decode_float,
    decode_pair,
    decode_unsigned,
    field,
)

RESOURCE_PATH = "interface/wifi/registration-table"

MAC_LABELS = ("mac",)


class WirelessCollector(Collector):
    name = "wireless"

    def __init__(self, client: DeviceClient,
                 namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(client, namespace)
        self.client_info = self._gauge(
            "wireless_client_info",
            "Wireless client information (always 1 for connected clients)",
            ("mac", "interface", "ssid"),
        )
        self.tx_bytes = self._counter(
            "wireless_tx_bytes_total",
            "Number of bytes transmitted by wireless client", MAC_LABELS,
        )
        self.tx_packets = self._counter(
            "wireless_tx_packets_total",
            "Number of packets transmitted by wireless client", MAC_LABELS,
        )
        self.rx_bytes = self._counter(
            "wireless_rx_bytes_total",
            "Number of bytes received by wireless client", MAC_LABELS,
        )
        self.rx_packets = self._counter(
            "wireless_rx_packets_total",
            "Number of packets received by wireless client", MAC_LABELS,
        )
        self.rx_rate = self._gauge(
            "wireless_rx_rate", "Wireless RX rate in bits per second", MAC_LABELS,
        )
        self.tx_rate = self._gauge(
            "wireless_tx_rate", "Wireless TX rate in bits per second", MAC_LABELS,
        )
        self.uptime = self._gauge(
            "wireless_uptime", "Wireless client uptime in seconds", MAC_LABELS,
        )
        self.signal = self._gauge(
            "wireless_signal", "Wireless client signal strength in dBm", MAC_LABELS,
        )

    async def collect(self, target: str, auth: AuthInfo) -> list[MetricSample]:
        registrations = await self.client.fetch(target, RESOURCE_PATH, auth)
        samples: list[MetricSample] = []

        for reg in registrations:
            mac = field(reg, "mac-address")
            if not mac:
                continue
            labels = (mac,)

            samples.append(self.client_info.sample(
                1, mac, field(reg, "interface"), field(reg, "ssid"),
            ))

            # "bytes" and "packets" are "tx,rx" pairs
            traffic = decode_pair(field(reg, "bytes"))
            if traffic is not None:
                samples.append(self.tx_bytes.sample(traffic[0], *labels))
                samples.append(self.rx_bytes.sample(traffic[1], *labels))
            packets = decode_pair(field(reg, "packets"))
            if packets is not None:
                samples.append(self.tx_packets.sample(packets[0], *labels))
                samples.append(self.rx_packets.sample(packets[1], *labels))

            self._emit(samples, self.rx_rate, decode_unsigned(field(reg, "rx-rate")), labels)
            self._emit(samples, self.tx_rate, decode_unsigned(field(reg, "tx-rate")), labels)
            self._emit(samples, self.uptime, decode_duration(field(reg, "uptime")), labels)
            self._emit(samples, self.signal, decode_float(field(reg, "signal")), labels)

        return samples
