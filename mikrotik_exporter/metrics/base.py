"""Metric descriptors and samples shared by all collectors."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

DEFAULT_NAMESPACE = "mikrotik_exporter"


class MetricKind(str, Enum):
    GAUGE = "gauge"
    COUNTER = "counter"


@dataclass(frozen=True)
class MetricDescriptor:
    """Name, help text, kind and label schema of one metric family."""
    name: str
    documentation: str
    kind: MetricKind = MetricKind.GAUGE
    labels: tuple[str, ...] = ()

    def sample(self, value: float, *label_values: str) -> MetricSample:
        return MetricSample(self, float(value), label_values)


@dataclass(frozen=True)
class MetricSample:
    """One value of a metric family, valid for a single probe only."""
    descriptor: MetricDescriptor
    value: float
    label_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        expected = len(self.descriptor.labels)
        if len(self.label_values) != expected:
            raise ValueError(
                f"{self.descriptor.name} expects {expected} label values, "
                f"got {len(self.label_values)}"
            )

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def labels(self) -> dict[str, str]:
        return dict(zip(self.descriptor.labels, self.label_values))


def gauge(name: str, documentation: str,
          labels: Sequence[str] = ()) -> MetricDescriptor:
    return MetricDescriptor(name, documentation, MetricKind.GAUGE, tuple(labels))


def counter(name: str, documentation: str,
            labels: Sequence[str] = ()) -> MetricDescriptor:
    return MetricDescriptor(name, documentation, MetricKind.COUNTER, tuple(labels))
