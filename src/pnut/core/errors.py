"""
Exception types raised by pnut for configuration and programmer errors.

Provides typed exceptions for structural misuse that cannot be recovered from mid-render:
- ScaleError for invalid scale construction (mixed continuity, non-numeric stacking).
- BinError for binning a column that has no intrinsic order.
- ChartConfigError for unknown scale kinds and invalid settings values.

Notes:
    - Recoverable lookups (unknown column, bad frame index, out-of-range blend or
      quantile) never raise; they are reported as diagnostics through
      pnut.core.diagnostics and return None.
    - Malformed raw values are normalized to None at ingest and are never errors.

Examples:
    Catch a mixed dimension.

    >>> from pnut.core.errors import MixedContinuityError, ScaleError
    >>> try:
    ...     raise MixedContinuityError("A scale cannot share continuous and non continuous data: a, b")
    ... except ScaleError as e:
    ...     msg = str(e)
    >>> "non continuous" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "ChartError",
    "ScaleError",
    "MixedContinuityError",
    "StackError",
    "BinError",
    "ChartConfigError",
]


class ChartError(Exception):
    """
    Base class for pnut errors.

    Notes:
        Use this as a catch-all for hard failures raised by the data container and
        the scale pipeline.
    """


class ScaleError(ChartError, ValueError):
    """Scale construction failure for a dimension."""


class MixedContinuityError(ScaleError):
    """
    Raised when one dimension groups continuous and non-continuous columns.

    Examples:
        - columns=["fruit", "amount"] where fruit is categorical and amount is numeric
    """


class StackError(ScaleError):
    """Raised when a stacked dimension references non-numeric values."""


class BinError(ChartError, ValueError):
    """Raised when binning is requested on a non-continuous column."""


class ChartConfigError(ChartError, ValueError):
    """
    Raised when configuration is invalid or unsupported.

    Examples:
        - Unknown scale kind such as "scaleSpiral"
        - Band padding outside [0, 1]
    """
