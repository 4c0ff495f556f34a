"""
Value helpers shared by catalog parsing, generation and manual editing.
Flow-graph node records arrive as loosely-typed dicts from the editor, so
lookups tolerate missing keys, None and numeric strings.
"""
from typing import Any, Optional


# -----------------------------------------------------------------------------
# Lookup helpers for editor node records
# -----------------------------------------------------------------------------

def get_field(record: dict, name: str, default: Any = None) -> Any:
    """
    Read a value from a node record, supporting dotted keys for nested dicts.
    E.g. get_field(node, "data.label", "") -> node["data"]["label"] or default.
    If any intermediate key is missing or not a dict, returns default.
    """
    if not record or not name:
        return default
    keys = name.split(".")
    current = record
    for key in keys[:-1]:
        next_val = current.get(key)
        if next_val is None or not isinstance(next_val, dict):
            return default
        current = next_val
    value = current.get(keys[-1], default)
    return default if value is None else value


def as_float(raw: Any, default: float = 0.0) -> float:
    """Coerce raw to float; unparseable or missing values become default."""
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        return default


# -----------------------------------------------------------------------------
# Numeric helpers
# -----------------------------------------------------------------------------

def round_to(value: float, decimals: int) -> float:
    """Round to a fixed number of decimals to suppress binary float noise."""
    return round(float(value), decimals)


def clamp_if_bounds(
    value: float,
    min: Optional[float] = None,
    max: Optional[float] = None,
) -> float:
    """
    Clamp value to [min, max] when bounds are not None.
    If both are None, returns value unchanged.
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return value
    if min is not None and v < min:
        return min
    if max is not None and v > max:
        return max
    return v
