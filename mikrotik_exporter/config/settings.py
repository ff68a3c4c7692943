"""YAML config loader with environment variable expansion."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from mikrotik_exporter.device.client import DEFAULT_FETCH_TIMEOUT
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.metrics.base import DEFAULT_NAMESPACE

DEFAULT_PROBE_TIMEOUT = 30.0


class ConfigLookupError(LookupError):
    """A named auth profile or module is not configured."""


def _expand_env_vars(value: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""
    pattern = re.compile(r"\$\{([^}]+)\}")
    def replacer(match: re.Match) -> str:
        var = match.group(1)
        return os.environ.get(var, match.group(0))
    return pattern.sub(replacer, value)


def _walk_and_expand(obj: object) -> object:
    """Recursively expand environment variables in strings."""
    if isinstance(obj, str):
        return _expand_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _walk_and_expand(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_walk_and_expand(item) for item in obj]
    return obj


class AuthConfig(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: str
    password: str = ""


class ModuleConfig(BaseModel):
    collectors: dict[str, bool] = Field(default_factory=dict)

    @property
    def enabled(self) -> list[str]:
        return sorted(name for name, on in self.collectors.items() if on)


class Settings(BaseModel):
    """Auth profiles and modules, loaded once at startup."""
    auths: dict[str, AuthConfig] = Field(default_factory=dict)
    modules: dict[str, ModuleConfig] = Field(default_factory=dict)

    def resolve_auth(self, name: str) -> AuthInfo:
        auth = self.auths.get(name)
        if auth is None:
            raise ConfigLookupError(f"auth configuration '{name}' not found")
        return AuthInfo(username=auth.username, password=auth.password)

    def resolve_module(self, name: str) -> ModuleConfig:
        module = self.modules.get(name)
        if module is None:
            raise ConfigLookupError(f"module configuration '{name}' not found")
        return module


class ServerConfig(BaseModel):
    """Process-level options, normally taken from the environment."""
    listen_addr: str = "0.0.0.0"
    listen_port: int = 9261
    config_file: str = "./config.yaml"
    namespace: str = DEFAULT_NAMESPACE
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    scheme: str = "http"
    verify_tls: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build from environment variables; empty values keep the default."""
        env = os.environ if environ is None else environ
        mapping = {
            "listen_addr": "LISTEN_ADDR",
            "listen_port": "LISTEN_PORT",
            "config_file": "CONFIG_FILE",
            "namespace": "METRICS_NAMESPACE",
            "probe_timeout": "PROBE_TIMEOUT",
            "fetch_timeout": "FETCH_TIMEOUT",
            "scheme": "DEVICE_SCHEME",
            "verify_tls": "DEVICE_VERIFY_TLS",
            "log_level": "LOG_LEVEL",
        }
        values = {key: env[var] for key, var in mapping.items() if env.get(var)}
        return cls.model_validate(values)


def load_config(path: str | Path) -> Settings:
    """Load auth profiles and modules from a YAML file."""
    path = Path(path)
    if not path.is_file():
        raise ValueError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse config file {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    raw = _walk_and_expand(raw)

    return Settings.model_validate(raw)
