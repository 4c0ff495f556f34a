"""
Map abstract design levels onto physical parameter values.
-1 -> min, 0 -> midpoint, 1 -> max.
"""
from typing import List, Sequence

import numpy as np

from dropletgen.core.types import ParameterSpec, ValueAssignment


def map_level(level: int, spec: ParameterSpec) -> float:
    if level == -1:
        return spec.min
    if level == 1:
        return spec.max
    return (spec.min + spec.max) / 2


def map_design(design: np.ndarray, specs: Sequence[ParameterSpec]) -> List[ValueAssignment]:
    """
    Map every design row to a ValueAssignment keyed by spec identity.
    Column c of the design belongs to specs[c].
    """
    design = np.asarray(design, dtype=int)
    if design.size == 0:
        return []
    if design.shape[1] != len(specs):
        raise ValueError(
            f"Design has {design.shape[1]} factors but {len(specs)} parameters were given"
        )

    lows = np.array([s.min for s in specs], dtype=float)
    highs = np.array([s.max for s in specs], dtype=float)
    mids = (lows + highs) / 2
    values = np.where(design == -1, lows, np.where(design == 1, highs, mids))

    keys = [s.key for s in specs]
    return [
        {key: float(v) for key, v in zip(keys, row)}
        for row in values
    ]
