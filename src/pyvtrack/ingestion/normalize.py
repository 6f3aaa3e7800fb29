"""Normalization helpers.

Centralizes defensive parsing and placeholder handling for backend rows.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None or math.isinf(parsed):
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    """Coerce ids and labels to ``str``; ``None`` and blank strings become ``None``.

    Ids come back from PHP as either ``7`` or ``"7"`` depending on the
    endpoint.
    """
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value)
    return text if text.strip() else None


def is_meaningful(value: Any) -> bool:
    """Return True if the value carries data (not a placeholder)."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if value == {}:
        return False
    return bool(value != [])


def pick_first(record: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Return the first meaningful value among synonym *keys* of *record*.

    Keys are tried in order, so the caller's ordering is the precedence
    (e.g. ``("agent_name", "agentName", "agent_username")``).
    """
    for key in keys:
        value = record.get(key)
        if is_meaningful(value):
            return value
    return None
