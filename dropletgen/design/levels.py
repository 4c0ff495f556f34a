"""
Three-level response-surface design (Box-Behnken style).

Rows are design points, columns are factors, entries are levels in
{-1, 0, 1}. Row order is part of the contract: downstream tables label
runs by position.
"""
from itertools import combinations

import numpy as np

from dropletgen.config import REPLICATE_CENTER_POINTS

# Fixed 3-level scheme; there is no variable-level variant.
DESIGN_LEVELS = (-1, 0, 1)

# Corner combinations for each factor pair, in emission order
PAIR_CORNERS = ((-1, -1), (-1, 1), (1, -1), (1, 1))


def design_size(factor_count: int) -> int:
    """Number of runs for k factors: 1 center + 4 per pair + replicates."""
    if factor_count < 2:
        return 0
    pairs = factor_count * (factor_count - 1) // 2
    return 1 + len(PAIR_CORNERS) * pairs + REPLICATE_CENTER_POINTS


def build_level_design(factor_count: int) -> np.ndarray:
    """
    Build the abstract design matrix for `factor_count` factors.

    Returns an int array of shape (design_size(k), k). For k < 2 the result
    is empty (zero rows); the caller decides how to report that.
    """
    k = max(int(factor_count), 0)
    design = np.zeros((design_size(k), k), dtype=int)
    if k < 2:
        return design

    # Row 0 is the center point; leave it at zeros.
    row = 1
    for i, j in combinations(range(k), 2):
        for level_i, level_j in PAIR_CORNERS:
            design[row, i] = level_i
            design[row, j] = level_j
            row += 1
    # Trailing replicate center rows are already zero.
    return design
