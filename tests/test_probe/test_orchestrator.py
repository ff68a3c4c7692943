"""Tests for concurrent probe orchestration."""

from __future__ import annotations

import asyncio
import time

import httpx
import pytest

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.collectors.interfaces import InterfacesCollector
from mikrotik_exporter.collectors.system import SystemCollector
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.device.errors import DeviceTransportError
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import MetricSample
from mikrotik_exporter.probe.orchestrator import ProbeOrchestrator, ProbeResult
from tests.fakes import INTERFACES, SYSTEM_RESOURCE, FakeDevice, SlowResponse

NS = "mikrotik_exporter"


class ScriptedCollector(Collector):
    """Emits a fixed number of samples, optionally after a delay or error."""

    def __init__(self, name: str, count: int = 2, delay: float = 0.0,
                 error: BaseException | None = None) -> None:
        super().__init__(DeviceClient())
        self.name = name
        self.count = count
        self.delay = delay
        self.error = error
        self.cancelled = False
        self.value = self._gauge(f"{name}_value", "Scripted value", ("index",))

    async def collect(self, target: str, auth: AuthInfo) -> list[MetricSample]:
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return [self.value.sample(i, str(i)) for i in range(self.count)]


def success_values(result: ProbeResult) -> dict[str, float]:
    return {
        s.label_values[0]: s.value
        for s in result.samples
        if s.name == f"{NS}_collector_success"
    }


@pytest.mark.asyncio
async def test_run_all_succeed(auth: AuthInfo):
    orchestrator = ProbeOrchestrator()
    result = await orchestrator.run("r1", auth, [
        ScriptedCollector("alpha", count=2), ScriptedCollector("beta", count=3),
    ])

    assert result.failed == []
    assert success_values(result) == {"alpha": 1, "beta": 1}
    assert len([s for s in result.samples if s.name == "alpha_value"]) == 2
    assert len([s for s in result.samples if s.name == "beta_value"]) == 3
    # collector samples come before the success samples
    assert [s.name for s in result.samples[-2:]] == [f"{NS}_collector_success"] * 2


@pytest.mark.asyncio
async def test_failure_is_isolated(auth: AuthInfo):
    orchestrator = ProbeOrchestrator()
    failing = ScriptedCollector(
        "alpha", error=DeviceTransportError("http://r1/rest/x", "connection refused"),
    )
    result = await orchestrator.run("r1", auth, [failing, ScriptedCollector("beta", count=4)])

    assert result.failed == ["alpha"]
    assert success_values(result) == {"alpha": 0, "beta": 1}
    assert not any(s.name == "alpha_value" for s in result.samples)
    assert len([s for s in result.samples if s.name == "beta_value"]) == 4
    assert "connection refused" in result.outcomes[0].error


@pytest.mark.asyncio
async def test_unexpected_exception_counts_as_failure(auth: AuthInfo):
    orchestrator = ProbeOrchestrator()
    result = await orchestrator.run("r1", auth, [
        ScriptedCollector("alpha", error=RuntimeError("bug")),
        ScriptedCollector("beta"),
    ])
    assert success_values(result) == {"alpha": 0, "beta": 1}
    assert result.outcomes[0].error == "bug"


@pytest.mark.asyncio
async def test_deadline_cancels_slow_collector(auth: AuthInfo):
    orchestrator = ProbeOrchestrator(timeout=0.2)
    slow = ScriptedCollector("slow", delay=10)
    fast = ScriptedCollector("fast", count=3)

    started = time.monotonic()
    result = await orchestrator.run("r1", auth, [fast, slow])
    elapsed = time.monotonic() - started

    assert elapsed < 2
    assert slow.cancelled
    assert success_values(result) == {"fast": 1, "slow": 0}
    assert result.outcomes[1].error == "deadline exceeded"
    assert len([s for s in result.samples if s.name == "fast_value"]) == 3


@pytest.mark.asyncio
async def test_collectors_run_concurrently(auth: AuthInfo):
    orchestrator = ProbeOrchestrator()
    collectors = [ScriptedCollector(f"c{i}", delay=0.2) for i in range(5)]

    started = time.monotonic()
    result = await orchestrator.run("r1", auth, collectors)

    assert time.monotonic() - started < 0.9
    assert result.failed == []


@pytest.mark.asyncio
async def test_no_collectors(auth: AuthInfo):
    result = await ProbeOrchestrator().run("r1", auth, [])
    assert result.samples == []
    assert result.outcomes == []


@pytest.mark.asyncio
async def test_cancelled_probe_cancels_collectors(auth: AuthInfo):
    orchestrator = ProbeOrchestrator()
    slow = ScriptedCollector("slow", delay=10)

    task = asyncio.create_task(orchestrator.run("r1", auth, [slow]))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert slow.cancelled


@pytest.mark.asyncio
async def test_real_collectors_against_fake_device(auth: AuthInfo):
    device = FakeDevice({
        "interface": INTERFACES,
        "system/resource": httpx.ConnectError("connection refused"),
    })
    client = device.client()
    orchestrator = ProbeOrchestrator()

    result = await orchestrator.run(
        "r1", auth, [InterfacesCollector(client), SystemCollector(client)],
    )

    assert success_values(result) == {"interfaces": 1, "system": 0}
    assert any(s.name == f"{NS}_interface_rx_bytes_total" for s in result.samples)
    assert not any(s.name.startswith(f"{NS}_system_") for s in result.samples)


@pytest.mark.asyncio
async def test_undecodable_field_does_not_fail_collector(auth: AuthInfo):
    record = dict(INTERFACES[0], **{"rx-byte": "9" * 400})
    device = FakeDevice({"interface": [record]})

    result = await ProbeOrchestrator().run("r1", auth, [InterfacesCollector(device.client())])

    assert result.failed == []
    assert success_values(result) == {"interfaces": 1}
    names = {s.name for s in result.samples}
    assert f"{NS}_interface_rx_bytes_total" not in names
    assert f"{NS}_interface_tx_bytes_total" in names


@pytest.mark.asyncio
async def test_fetch_deadline_inside_probe(auth: AuthInfo):
    device = FakeDevice({
        "interface": SlowResponse(delay=5, body=INTERFACES),
        "system/resource": SYSTEM_RESOURCE,
    })
    client = device.client(fetch_timeout=0.1)
    orchestrator = ProbeOrchestrator(timeout=2)

    result = await orchestrator.run(
        "r1", auth, [InterfacesCollector(client), SystemCollector(client)],
    )

    assert success_values(result) == {"interfaces": 0, "system": 1}
    assert "no response within" in result.outcomes[0].error
    assert device.cancelled == ["interface"]


def test_namespace_applies_to_success_metric():
    assert ProbeOrchestrator(namespace="edge").describe()[0].name == "edge_collector_success"
