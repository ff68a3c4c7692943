"""Render probe samples in the Prometheus text exposition format."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from mikrotik_exporter.metrics.base import MetricDescriptor, MetricKind, MetricSample


def _family(descriptor: MetricDescriptor) -> Metric:
    if descriptor.kind is MetricKind.COUNTER:
        return CounterMetricFamily(
            descriptor.name, descriptor.documentation, labels=list(descriptor.labels),
        )
    return GaugeMetricFamily(
        descriptor.name, descriptor.documentation, labels=list(descriptor.labels),
    )


class SampleCollector:
    """Exposes a fixed list of samples through the prometheus_client
    collector protocol. Families are built in first-seen order."""

    def __init__(self, samples: Iterable[MetricSample]) -> None:
        self._samples = list(samples)

    def collect(self) -> Iterator[Metric]:
        families: dict[MetricDescriptor, Metric] = {}
        for sample in self._samples:
            family = families.get(sample.descriptor)
            if family is None:
                family = families[sample.descriptor] = _family(sample.descriptor)
            family.add_metric(list(sample.label_values), sample.value)
        yield from families.values()


def render(samples: Iterable[MetricSample]) -> bytes:
    """Render samples using a registry private to this call."""
    registry = CollectorRegistry(auto_describe=False)
    registry.register(SampleCollector(samples))
    return generate_latest(registry)
