"""
Runtime configuration read from the environment, plus generation constants.
"""
import os

ENV = os.environ.get("ENV", "development").lower()
DEV = ENV in ("development", "dev", "test")

LOG_LEVEL = os.environ.get("DROPLETGEN_LOG_LEVEL", "INFO").upper()
API_HOST = os.environ.get("DROPLETGEN_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("DROPLETGEN_PORT", "8000"))

# Interpolation
DEFAULT_STEPS = 5
MIN_STEPS = 2
ROUND_DECIMALS = 3

# Level design: center point, pairwise blocks, then replicate centers
REPLICATE_CENTER_POINTS = 3

# Ratio normalization
RATIO_TOLERANCE = 1e-9

# Manual adjustment: one nudge moves 5% of the parameter range
NUDGE_FRACTION = 0.05
NUDGE_DECIMALS = 2
