"""System resource collector — CPU, memory, disk, uptime."""

from __future__ import annotations

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import DEFAULT_NAMESPACE, MetricSample
from mikrotik_exporter.metrics.decoders import decode_duration, decode_unsigned, field

RESOURCE_PATH = "system/resource"

TARGET_LABELS = ("target",)

GAUGE_FIELDS = (
    ("cpu-count", "system_cpu_cores", "Number of CPU cores"),
    ("cpu-frequency", "system_cpu_freq", "CPU frequency in MHz"),
    ("cpu-load", "system_cpu_load", "CPU load percentage"),
    ("total-hdd-space", "system_total_disk", "Total disk space in bytes"),
    ("free-hdd-space", "system_free_disk", "Free disk space in bytes"),
    ("bad-blocks", "system_bad_blocks", "Number of bad blocks"),
    ("total-memory", "system_total_memory", "Total memory in bytes"),
    ("free-memory", "system_free_memory", "Free memory in bytes"),
)


class SystemCollector(Collector):
    name = "system"

    def __init__(self, client: DeviceClient,
                 namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(client, namespace)
        self.info = self._gauge(
            "system_info", "System information",
            ("target", "board_name", "cpu_model", "version", "platform"),
        )
        self.gauges = [
            (key, self._gauge(suffix, documentation, TARGET_LABELS))
            for key, suffix, documentation in GAUGE_FIELDS
        ]
        self.write_sect_total = self._counter(
            "system_write_sect_total", "Total write sectors", TARGET_LABELS,
        )
        self.uptime = self._gauge(
            "system_uptime", "System uptime in seconds", TARGET_LABELS,
        )

    async def collect(self, target: str, auth: AuthInfo) -> list[MetricSample]:
        resource = await self.client.fetch_one(target, RESOURCE_PATH, auth)
        labels = (target,)
        samples: list[MetricSample] = [
            self.info.sample(
                1, target,
                field(resource, "board-name"),
                field(resource, "cpu"),
                field(resource, "version"),
                field(resource, "platform"),
            ),
        ]

        for key, descriptor in self.gauges:
            self._emit(samples, descriptor, decode_unsigned(field(resource, key)), labels)
        self._emit(samples, self.write_sect_total,
                   decode_unsigned(field(resource, "write-sect-total")), labels)
        self._emit(samples, self.uptime,
                   decode_duration(field(resource, "uptime")), labels)

        return samples
