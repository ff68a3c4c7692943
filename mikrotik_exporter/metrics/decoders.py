"""Decoders for RouterOS REST fields.

RouterOS transmits every field as a string, whatever its logical type.
Each decoder either returns a value or ``None``; ``None`` means the
corresponding sample must be left out rather than reported as zero.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_UNSIGNED = 2**64 - 1
MAX_UNSIGNED_DIGITS = len(str(MAX_UNSIGNED))

# Fixed order in which duration components may appear, e.g. 2w4d1h12m27s.
DURATION_UNITS: tuple[tuple[str, int], ...] = (
    ("w", 7 * 24 * 3600),
    ("d", 24 * 3600),
    ("h", 3600),
    ("m", 60),
    ("s", 1),
)


def field(record: Mapping[str, Any], key: str) -> str:
    """Return a record field as a string, ``""`` when absent or null."""
    value = record.get(key)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


def decode_unsigned(value: str) -> int | None:
    """Parse a base-10 unsigned 64-bit integer."""
    if not _is_digits(value):
        return None
    significant = value.lstrip("0") or "0"
    if len(significant) > MAX_UNSIGNED_DIGITS:
        return None
    number = int(significant)
    if number > MAX_UNSIGNED:
        return None
    return number


def decode_float(value: str) -> float | None:
    """Parse a finite decimal number such as ``-72`` or ``12.5``."""
    if not value or value != value.strip() or "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def decode_flag(value: str, literal: str = "true") -> float:
    """Project a field onto 1.0/0.0 by exact match against *literal*."""
    return 1.0 if value == literal else 0.0


def _strip_milliseconds(value: str) -> str:
    if not value.endswith("ms"):
        return value
    head = value[:-2]
    rest = head.rstrip("0123456789")
    if len(rest) == len(head):
        return value
    return rest


def decode_duration(value: str) -> int | None:
    """Convert a RouterOS duration (``2w4d1h12m27s``) to seconds.

    Components are optional but must follow the w, d, h, m, s order, each
    one an integer immediately followed by its unit. A trailing
    milliseconds component is dropped. Malformed input and a total of
    zero both yield ``None``.
    """
    text = _strip_milliseconds(value)
    total = 0
    pos = 0
    next_unit = 0
    while pos < len(text):
        start = pos
        while pos < len(text) and text[pos].isascii() and text[pos].isdigit():
            pos += 1
        if pos == start or pos == len(text) or pos - start > MAX_UNSIGNED_DIGITS:
            return None
        unit = text[pos]
        for index in range(next_unit, len(DURATION_UNITS)):
            if DURATION_UNITS[index][0] == unit:
                break
        else:
            return None
        total += int(text[start:pos]) * DURATION_UNITS[index][1]
        next_unit = index + 1
        pos += 1
    return total or None


def decode_timestamp(value: str) -> int | None:
    """Convert ``YYYY-MM-DD HH:MM:SS`` (UTC) to epoch seconds."""
    if not value:
        return None
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        return None
    epoch = int(parsed.replace(tzinfo=timezone.utc).timestamp())
    if epoch <= 0:
        return None
    return epoch


def decode_pair(value: str) -> tuple[int, int] | None:
    """Parse a ``"tx,rx"`` pair; both halves decode or neither does."""
    parts = value.split(",")
    if len(parts) != 2:
        return None
    first = decode_unsigned(parts[0].strip())
    second = decode_unsigned(parts[1].strip())
    if first is None or second is None:
        return None
    return first, second


def select_fallback(primary: str, secondary: str) -> str | None:
    """Return the first non-empty value, or ``None`` when both are empty."""
    if primary:
        return primary
    if secondary:
        return secondary
    return None
