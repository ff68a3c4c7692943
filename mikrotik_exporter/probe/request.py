"""Probe request validation — resolves auth, module and collectors."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.collectors.registry import CollectorRegistry
from mikrotik_exporter.config.settings import ConfigLookupError, Settings
from mikrotik_exporter.device.models import AuthInfo
from mikrotik_exporter.probe.errors import RequestValidationError

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"


@dataclass(frozen=True)
class ProbeRequest:
    target: str
    auth: AuthInfo
    module: str
    collectors: list[Collector] = field(default_factory=list)


def build_probe_request(
    settings: Settings,
    registry: CollectorRegistry,
    target: str | None,
    auth_name: str | None = None,
    module_name: str | None = None,
) -> ProbeRequest:
    """Validate query parameters before any device is contacted.

    Empty ``auth``/``module`` values fall back to ``"default"``.
    """
    if not target:
        raise RequestValidationError("Missing 'target' parameter")
    auth_name = auth_name or DEFAULT_PROFILE
    module_name = module_name or DEFAULT_PROFILE

    try:
        auth = settings.resolve_auth(auth_name)
    except ConfigLookupError as exc:
        raise RequestValidationError(f"Auth configuration error: {exc}") from exc
    try:
        module = settings.resolve_module(module_name)
    except ConfigLookupError as exc:
        raise RequestValidationError(f"Module configuration error: {exc}") from exc

    collectors = registry.resolve(module.collectors)
    if not collectors:
        logger.debug("Module %s has no registered collectors among enabled %s",
                     module_name, module.enabled)
        raise RequestValidationError("No collectors enabled for this module")

    return ProbeRequest(
        target=target, auth=auth, module=module_name, collectors=collectors,
    )
