from mikrotik_exporter.collectors.base import Collector
from mikrotik_exporter.collectors.registry import CollectorRegistry, build_default_registry

__all__ = ["Collector", "CollectorRegistry", "build_default_registry"]
