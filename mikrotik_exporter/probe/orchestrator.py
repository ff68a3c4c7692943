"""Probe orchestrator — runs collectors against one target under a deadline."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.config.settings import DEFAULT_PROBE_TIMEOUT
from mikrotik_exporter.device.errors import DeviceError
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import (
    DEFAULT_NAMESPACE,
    MetricDescriptor,
    MetricSample,
    gauge,
)

logger = logging.getLogger(__name__)


@dataclass
class CollectorOutcome:
    name: str
    success: bool
    error: str | None = None


@dataclass
class ProbeResult:
    target: str
    samples: list[MetricSample] = field(default_factory=list)
    outcomes: list[CollectorOutcome] = field(default_factory=list)

    @property
    def failed(self) -> list[str]:
        return [o.name for o in self.outcomes if not o.success]


class ProbeOrchestrator:
    """Runs the selected collectors concurrently and tags each with success.

    Every collector gets its own task and its own sample buffer. A failing
    or unfinished collector only loses its own samples; the probe as a
    whole always completes within ``timeout`` plus cancellation time.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE,
                 timeout: float = DEFAULT_PROBE_TIMEOUT) -> None:
        self.timeout = timeout
        self.success = gauge(
            f"{namespace}_collector_success",
            "Whether the collector succeeded (1 = success, 0 = failure)",
            ("collector",),
        )

    def describe(self) -> list[MetricDescriptor]:
        return [self.success]

    async def run(self, target: str, auth: AuthInfo,
                  collectors: Sequence[Collector]) -> ProbeResult:
        result = ProbeResult(target=target)
        if not collectors:
            return result

        started = time.monotonic()
        tasks = [
            asyncio.create_task(
                self._collect(collector, target, auth),
                name=f"collect-{collector.name}-{target}",
            )
            for collector in collectors
        ]
        try:
            _, pending = await asyncio.wait(tasks, timeout=self.timeout)
            if pending:
                logger.warning(
                    "Probe of %s hit the %gs deadline with %d collector(s) running",
                    target, self.timeout, len(pending),
                )
        finally:
            # Also reached when the probe itself is cancelled
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        for collector, task in zip(collectors, tasks):
            outcome = self._outcome(collector, task, target)
            if outcome.success:
                result.samples.extend(task.result())
            result.outcomes.append(outcome)

        for outcome in result.outcomes:
            result.samples.append(
                self.success.sample(1 if outcome.success else 0, outcome.name),
            )

        logger.debug("Probe of %s finished in %.3fs (%d samples, failed: %s)",
                     target, time.monotonic() - started,
                     len(result.samples), result.failed or "none")
        return result

    async def _collect(self, collector: Collector, target: str,
                       auth: AuthInfo) -> list[MetricSample]:
        started = time.monotonic()
        samples = await collector.collect(target, auth)
        logger.debug("Collector %s on %s: %d samples in %.3fs",
                     collector.name, target, len(samples), time.monotonic() - started)
        return samples

    def _outcome(self, collector: Collector, task: asyncio.Task,
                 target: str) -> CollectorOutcome:
        if task.cancelled():
            return CollectorOutcome(collector.name, False, "deadline exceeded")
        exc = task.exception()
        if exc is None:
            return CollectorOutcome(collector.name, True)
        if isinstance(exc, DeviceError):
            logger.warning("Collector %s failed for %s: %s", collector.name, target, exc)
        else:
            logger.error("Collector %s raised for %s", collector.name, target,
                         exc_info=exc)
        return CollectorOutcome(collector.name, False, str(exc))
