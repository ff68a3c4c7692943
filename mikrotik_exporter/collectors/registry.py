"""Collector registry — lookup and module resolution for collectors."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.metrics.base import DEFAULT_NAMESPACE, MetricDescriptor

logger = logging.getLogger(__name__)


class CollectorRegistry:
    """Catalogue of collectors keyed by name.

    Populated once at startup; afterwards only read, so concurrent probes
    can share it without locking.
    """

    def __init__(self) -> None:
        self._collectors: dict[str, Collector] = {}

    def register(self, collector: Collector) -> None:
        if collector.name in self._collectors:
            logger.debug("Replacing collector %s", collector.name)
        self._collectors[collector.name] = collector

    def get(self, name: str) -> Collector:
        try:
            return self._collectors[name]
        except KeyError:
            raise KeyError(f"collector '{name}' not found") from None

    def resolve(self, selection: Mapping[str, bool]) -> list[Collector]:
        """Return enabled, registered collectors sorted by name.

        Names in *selection* that are not registered are ignored.
        """
        return [
            self._collectors[name]
            for name in sorted(selection)
            if selection[name] and name in self._collectors
        ]

    def names(self) -> list[str]:
        return sorted(self._collectors)

    def describe(self) -> list[MetricDescriptor]:
        return [
            descriptor
            for name in self.names()
            for descriptor in self._collectors[name].describe()
        ]

    def __len__(self) -> int:
        return len(self._collectors)


def build_default_registry(client: DeviceClient,
                           namespace: str = DEFAULT_NAMESPACE) -> CollectorRegistry:
    """Build a registry with all built-in collectors."""
    from mikrotik_exporter.collectors.bgp import BGPCollector
    from mikrotik_exporter.collectors.dhcp import DHCPCollector
    from mikrotik_exporter.collectors.firewall import FirewallCollector
    from mikrotik_exporter.collectors.interfaces import InterfacesCollector
    from mikrotik_exporter.collectors.system import SystemCollector
    from mikrotik_exporter.collectors.wireless import WirelessCollector

    registry = CollectorRegistry()

    registry.register(InterfacesCollector(client, namespace))
    registry.register(DHCPCollector(client, namespace))
    registry.register(BGPCollector(client, namespace))
    registry.register(SystemCollector(client, namespace))
    registry.register(WirelessCollector(client, namespace))
    registry.register(FirewallCollector(client, namespace))

    return registry
