"""Firewall rule collector — filter, nat, mangle and raw tables."""

from __future__ import annotations

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import DEFAULT_NAMESPACE, MetricSample
from mikrotik_exporter.metrics.decoders import decode_flag, decode_float, field

TABLES = ("filter", "nat", "mangle", "raw")

RULE_LABELS = ("id", "table")


def table_path(table: str) -> str:
    return f"ip/firewall/{table}"


class FirewallCollector(Collector):
    """Collects per-rule counters from every firewall table.

    Tables are fetched one after another; a failure on any of them fails
    the whole collector.
    """

    name = "firewall"

    def __init__(self, client: DeviceClient,
                 namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(client, namespace)
        self.rule_enabled = self._gauge(
            "firewall_rule_enabled",
            "Firewall rule enabled status (1 = enabled, 0 = disabled)",
            RULE_LABELS,
        )
        self.rule_bytes = self._counter(
            "firewall_rule_bytes", "Number of bytes matched by firewall rule",
            RULE_LABELS,
        )
        self.rule_packets = self._counter(
            "firewall_rule_packets", "Number of packets matched by firewall rule",
            RULE_LABELS,
        )
        self.rule_info = self._gauge(
            "firewall_rule_info", "Firewall rule information",
            ("id", "table", "chain", "action", "comment"),
        )

    async def collect(self, target: str, auth: AuthInfo) -> list[MetricSample]:
        samples: list[MetricSample] = []

        for table in TABLES:
            rules = await self.client.fetch(target, table_path(table), auth)
            for rule in rules:
                rule_id = field(rule, ".id")
                if not rule_id:
                    continue
                labels = (rule_id, table)

                enabled = 1.0 - decode_flag(field(rule, "disabled"))
                samples.append(self.rule_enabled.sample(enabled, *labels))
                self._emit(samples, self.rule_bytes,
                           decode_float(field(rule, "bytes")), labels)
                self._emit(samples, self.rule_packets,
                           decode_float(field(rule, "packets")), labels)
                samples.append(self.rule_info.sample(
                    1, rule_id, table,
                    field(rule, "chain"), field(rule, "action"), field(rule, "comment"),
                ))

        return samples
