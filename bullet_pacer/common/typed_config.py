# bullet_pacer/common/typed_config.py
#
# Tolerant value converters used when building frozen config dataclasses
# from hand-edited JSON. A bad value never raises here; it falls back to the
# field default and range validation happens in the dataclass itself.

from __future__ import annotations

import math
from typing import Any

# Recognized bool strings
_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


def safe_int(value: Any, default: int) -> int:
    """int conversion. None/bool/float/failed conversion return default.

    Note:
        bool is a subclass of int but intentionally returns default, so a
        stray ``true`` never becomes a window size of 1. float also returns
        default to avoid silent truncation.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def safe_float(value: Any, default: float) -> float:
    """float conversion. None/bool/NaN/failed conversion return default."""
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result):
        return default
    return result


def safe_bool(value: Any, default: bool = False) -> bool:
    """bool conversion. Unrecognized strings return default (typo guard)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lower = value.strip().lower()
        if lower in _TRUE_STRINGS:
            return True
        if lower in _FALSE_STRINGS:
            return False
        return default
    return default


def section(data: Any, key: str) -> dict[str, Any]:
    """Return a shallow copy of ``data[key]`` if it is a dict, else ``{}``."""
    if not isinstance(data, dict):
        return {}
    raw = data.get(key)
    return dict(raw) if isinstance(raw, dict) else {}
