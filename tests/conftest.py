"""Shared test fixtures."""

from __future__ import annotations

import pytest

from mikrotik_exporter.config.settings import AuthConfig, ModuleConfig, Settings
from mikrotik_exporter.device.models import AuthInfo
from tests.fakes import FakeDevice


@pytest.fixture
def auth() -> AuthInfo:
    return AuthInfo(username="prometheus", password="secret")


@pytest.fixture
def fake_device() -> FakeDevice:
    return FakeDevice()


@pytest.fixture
def sample_settings() -> Settings:
    return Settings(
        auths={
            "default": AuthConfig(username="prometheus", password="secret"),
            "production": AuthConfig(username="monitor", password="hunter2"),
        },
        modules={
            "default": ModuleConfig(collectors={"interfaces": True, "system": True}),
            "minimal": ModuleConfig(collectors={"system": True, "dhcp": False}),
            "empty": ModuleConfig(collectors={"interfaces": False}),
            "unknown_only": ModuleConfig(collectors={"snmp": True}),
        },
    )
