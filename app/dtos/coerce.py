"""Lenient scalar coercion for request payloads.

Payload parsing never fails: a value of the wrong shape becomes the
supplied default and the entity layer decides whether that is valid.
"""

from __future__ import annotations

import math
from typing import Any, TypeVar

T = TypeVar("T")


def as_str(value: Any, default: T) -> str | T:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return str(value)
    return default


def as_float(value: Any, default: T) -> float | T:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float, str)):
        try:
            result = float(value)
        except (ValueError, OverflowError):
            return default
        return result if math.isfinite(result) else default
    return default


def as_int(value: Any, default: T) -> int | T:
    # truncates toward zero, "7.9" -> 7
    result = as_float(value, None)
    if result is None:
        return default
    return int(result)


def as_str_list(value: Any, default: T) -> list[str] | T:
    if not isinstance(value, (list, tuple)):
        return default
    return [item for item in value if isinstance(item, str)]
