"""
pnut defaults consumed by ChartSettings, binning and scale construction.

Notes:
    - Band padding/alignment follow d3-scale defaults (padding 0, align 0.5).
    - Continuous scales are not clamped by default.
    - Binning defaults to the Sturges rule, as d3-array histograms do.
"""

from __future__ import annotations

__all__ = [
    "BAND_PADDING_INNER",
    "BAND_PADDING_OUTER",
    "BAND_ALIGN",
    "CLAMP",
    "DEFAULT_THRESHOLDS",
    "THRESHOLD_STRATEGIES",
    "DEFAULT_TICK_COUNT",
    "LOG_LEVEL",
    "LOWER_SUFFIX",
    "UPPER_SUFFIX",
]

BAND_PADDING_INNER: float = 0.0
BAND_PADDING_OUTER: float = 0.0
BAND_ALIGN: float = 0.5

CLAMP: bool = False

THRESHOLD_STRATEGIES: tuple[str, ...] = ("sturges", "scott", "freedman_diaconis")
DEFAULT_THRESHOLDS: str = "sturges"

# Tick count used by ContinuousScale.ticks() and nice() when none is given.
DEFAULT_TICK_COUNT: int = 10

LOG_LEVEL: str = "WARNING"

# Binned columns are replaced by f"{key}{LOWER_SUFFIX}" and f"{key}{UPPER_SUFFIX}".
LOWER_SUFFIX: str = "Lower"
UPPER_SUFFIX: str = "Upper"
