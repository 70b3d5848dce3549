"""
Pooled aggregations over chart scalars, computed with Polars.

ChartData pools the non-null values of one or more columns and hands them to
aggregate(). Numbers are aggregated directly; datetimes are aggregated on epoch
milliseconds and converted back where the result is a point in time; strings
support only min/max (natural ordering).

Notes
- Empty pools return None, except sum which returns 0.
- variance/deviation are population statistics (ddof=0).
- quantile uses linear interpolation between closest ranks (R-7, as d3-array).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import polars as pl

from pnut.core.typing import ChartScalar
from pnut.core.values import from_epoch_ms, is_value_date, is_value_number, to_epoch_ms

__all__ = ["Operation", "OPERATIONS", "aggregate", "value_kind"]

Operation = Literal["min", "max", "sum", "average", "median", "quantile", "variance", "deviation"]

OPERATIONS: tuple[str, ...] = (
    "min",
    "max",
    "sum",
    "average",
    "median",
    "quantile",
    "variance",
    "deviation",
)

# Operations whose result is a position in the value domain (dates map back to datetimes).
_POSITIONAL = {"min", "max", "average", "median", "quantile"}
_ORDERED_ONLY = {"min", "max"}

ValueKind = Literal["empty", "number", "date", "string", "mixed"]


def value_kind(values: Sequence[ChartScalar]) -> ValueKind:
    if not values:
        return "empty"
    if all(is_value_number(v) for v in values):
        return "number"
    if all(is_value_date(v) for v in values):
        return "date"
    if all(isinstance(v, str) for v in values):
        return "string"
    return "mixed"


_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _number_series(values: Sequence[int | float]) -> pl.Series:
    # Ints outside the Int64 range are aggregated as floats.
    if any(isinstance(v, float) or not _INT64_MIN <= v <= _INT64_MAX for v in values):
        return pl.Series("value", [float(v) for v in values], dtype=pl.Float64)
    return pl.Series("value", list(values), dtype=pl.Int64)


def _reduce(series: pl.Series, operation: str, p: float | None) -> ChartScalar:
    if operation == "min":
        return series.min()
    if operation == "max":
        return series.max()
    if operation == "sum":
        return series.sum()
    if operation == "average":
        return series.mean()
    if operation == "median":
        return series.median()
    if operation == "quantile":
        return series.quantile(p if p is not None else 0.5, interpolation="linear")
    if operation == "variance":
        return series.var(ddof=0)
    if operation == "deviation":
        return series.std(ddof=0)
    raise ValueError(f"unknown aggregation {operation!r}")


def aggregate(
    operation: Operation, values: Sequence[ChartScalar], p: float | None = None
) -> ChartScalar:
    """
    Aggregate a pool of non-null chart scalars.

    Args:
        operation: One of OPERATIONS.
        values: Non-null values pooled across columns.
        p: Quantile probability in [0, 1] (quantile only).

    Returns:
        The aggregate, or None when the pool is empty (sum returns 0).

    Raises:
        TypeError: If the values do not support the operation (e.g., the sum of
            strings, or a pool mixing strings and numbers).

    Examples:
        >>> aggregate("sum", [12, 32])
        44
        >>> aggregate("quantile", [99, 88, 55, 56, 4], p=0.25)
        55.0
        >>> aggregate("min", []) is None
        True
    """
    kind = value_kind(values)
    if kind == "empty":
        return 0 if operation == "sum" else None
    if kind == "mixed":
        raise TypeError(f"cannot compute {operation} over values of mixed types")
    if kind == "string":
        if operation not in _ORDERED_ONLY:
            raise TypeError(f"cannot compute {operation} over string values")
        return _reduce(pl.Series("value", list(values), dtype=pl.Utf8), operation, p)
    if kind == "date":
        if operation not in _POSITIONAL:
            raise TypeError(f"cannot compute {operation} over datetime values")
        if operation in _ORDERED_ONLY:
            return min(values) if operation == "min" else max(values)  # type: ignore[type-var]
        series = pl.Series("value", [to_epoch_ms(v) for v in values], dtype=pl.Float64)  # type: ignore[arg-type]
        ms = _reduce(series, operation, p)
        return None if ms is None else from_epoch_ms(float(ms), like=values[0])  # type: ignore[arg-type]
    return _reduce(_number_series(values), operation, p)  # type: ignore[arg-type]
