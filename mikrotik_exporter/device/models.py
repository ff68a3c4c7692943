"""Device data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# One flat object from a REST endpoint. Values are strings on the wire;
# read them through metrics.decoders.field().
ResourceRecord = Mapping[str, Any]


@dataclass(frozen=True)
class AuthInfo:
    username: str
    password: str = field(default="", repr=False)
