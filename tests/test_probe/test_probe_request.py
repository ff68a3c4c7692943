"""Tests for probe request validation."""

from __future__ import annotations

import logging

import pytest

from mikrotik_exporter.collectors.registry import CollectorRegistry, build_default_registry
from mikrotik_exporter.config.settings import Settings
from mikrotik_exporter.device.client import DeviceClient
from mikrotik_exporter.probe.errors import RequestValidationError
from mikrotik_exporter.probe.request import build_probe_request


@pytest.fixture
def registry() -> CollectorRegistry:
    return build_default_registry(DeviceClient())


def test_defaults(sample_settings: Settings, registry: CollectorRegistry):
    request = build_probe_request(sample_settings, registry, "192.168.88.1:80")
    assert request.target == "192.168.88.1:80"
    assert request.module == "default"
    assert request.auth.username == "prometheus"
    assert [c.name for c in request.collectors] == ["interfaces", "system"]


def test_empty_names_use_default(sample_settings: Settings, registry: CollectorRegistry):
    request = build_probe_request(sample_settings, registry, "r1", auth_name="", module_name="")
    assert request.auth.username == "prometheus"
    assert request.module == "default"


def test_named_profiles(sample_settings: Settings, registry: CollectorRegistry):
    request = build_probe_request(
        sample_settings, registry, "r1", auth_name="production", module_name="minimal",
    )
    assert request.auth.username == "monitor"
    assert request.auth.password == "hunter2"
    assert [c.name for c in request.collectors] == ["system"]


@pytest.mark.parametrize("target", [None, ""])
def test_missing_target(sample_settings: Settings, registry: CollectorRegistry, target):
    with pytest.raises(RequestValidationError, match="Missing 'target' parameter"):
        build_probe_request(sample_settings, registry, target)


def test_unknown_auth(sample_settings: Settings, registry: CollectorRegistry):
    with pytest.raises(RequestValidationError, match="Auth configuration error") as excinfo:
        build_probe_request(sample_settings, registry, "r1", auth_name="lab")
    assert "'lab' not found" in str(excinfo.value)


def test_unknown_module(sample_settings: Settings, registry: CollectorRegistry):
    with pytest.raises(RequestValidationError, match="Module configuration error"):
        build_probe_request(sample_settings, registry, "r1", module_name="nonexistent")


@pytest.mark.parametrize("module", ["empty", "unknown_only"])
def test_no_collectors_enabled(sample_settings: Settings, registry: CollectorRegistry,
                               module: str):
    with pytest.raises(RequestValidationError, match="No collectors enabled"):
        build_probe_request(sample_settings, registry, "r1", module_name=module)


def test_no_collectors_logs_enabled_names(sample_settings: Settings, registry: CollectorRegistry,
                                          caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="mikrotik_exporter.probe.request")
    with pytest.raises(RequestValidationError):
        build_probe_request(sample_settings, registry, "r1", module_name="unknown_only")
    assert "['snmp']" in caplog.text
