"""
Evenly spaced sweep of a single parameter.
"""
from typing import List

import numpy as np

from dropletgen.config import ROUND_DECIMALS
from dropletgen.core.params import round_to


def interpolate_range(low: float, high: float, steps: int) -> List[float]:
    """
    `steps` evenly spaced values from low to high inclusive, rounded to 3
    decimals. steps <= 1 yields [low]. low >= high is not rejected here;
    the sweep simply comes out degenerate or decreasing.
    """
    steps = int(steps)
    if steps <= 1:
        return [low]
    values = np.linspace(float(low), float(high), steps)
    return [round_to(v, ROUND_DECIMALS) for v in values]
