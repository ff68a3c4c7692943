"""Abstract collector interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import (
    DEFAULT_NAMESPACE,
    MetricDescriptor,
    MetricSample,
    counter,
    gauge,
)


class Collector(ABC):
    """Base class for collectors that turn one device domain into samples.

    Descriptors are built once in ``__init__`` and never change afterwards;
    ``collect`` keeps no state between calls.
    """

    name: str = ""

    def __init__(self, client: DeviceClient,
                 namespace: str = DEFAULT_NAMESPACE) -> None:
        self.client = client
        self.namespace = namespace
        self._descriptors: list[MetricDescriptor] = []

    def describe(self) -> list[MetricDescriptor]:
        return list(self._descriptors)

    @abstractmethod
    async def collect(self, target: str, auth: AuthInfo) -> list[MetricSample]:
        """Fetch from *target* and return this probe's samples."""

    def _gauge(self, suffix: str, documentation: str,
               labels: Sequence[str]) -> MetricDescriptor:
        descriptor = gauge(f"{self.namespace}_{suffix}", documentation, labels)
        self._descriptors.append(descriptor)
        return descriptor

    def _counter(self, suffix: str, documentation: str,
                 labels: Sequence[str]) -> MetricDescriptor:
        descriptor = counter(f"{self.namespace}_{suffix}", documentation, labels)
        self._descriptors.append(descriptor)
        return descriptor

    @staticmethod
    def _emit(samples: list[MetricSample], descriptor: MetricDescriptor,
              value: float | None, labels: Sequence[str]) -> None:
        """Append a sample unless the decoder suppressed the value."""
        if value is not None:
            samples.append(descriptor.sample(value, *labels))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, namespace={self.namespace!r})"
