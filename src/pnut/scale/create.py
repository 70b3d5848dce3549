"""
Scale construction from a dimension config and a ChartData.

Steps
1) Resolve continuity of every named column from the column metadata. Mixing
   continuous and categorical columns in one dimension raises
   MixedContinuityError.
2) Detect temporal data: the first non-null value of any named column is a datetime.
3) Pick the family: explicit scale_type, else time, linear or band.
4) Compute the domain for that family (extent, stacked extent, or unique values).
5) Build the scale with defaults from ChartSettings, then apply update_scale.

Failure policy
- Unknown columns are reported by the container as diagnostics; the domain falls
  back to an empty or degenerate one.
- Structural misuse (mixed continuity, stacking non-numeric columns, a continuous
  family over categorical columns) raises a ScaleError subclass.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Union

from pnut.core.config import ChartSettings
from pnut.core.errors import MixedContinuityError, ScaleError, StackError
from pnut.core.values import is_value_date, is_value_number
from pnut.data.chart_data import ChartData

from .categorical import BandScale, OrdinalScale, PointScale
from .config import DimensionDefinition, as_dimension_config
from .continuous import (
    ContinuousScale,
    LinearScale,
    LogScale,
    PowScale,
    SequentialScale,
    SqrtScale,
    TimeScale,
)
from .grammar import CONTINUOUS_KINDS, ScaleKind

__all__ = ["Scale", "create_scale", "column_continuity", "is_temporal", "stack_extent"]

logger = logging.getLogger(__name__)

Scale = Union[ContinuousScale, BandScale, PointScale, OrdinalScale]

_CONTINUOUS_FACTORIES: dict[ScaleKind, type[ContinuousScale]] = {
    ScaleKind.LINEAR: LinearScale,
    ScaleKind.LOG: LogScale,
    ScaleKind.POW: PowScale,
    ScaleKind.SQRT: SqrtScale,
    ScaleKind.TIME: TimeScale,
    ScaleKind.SEQUENTIAL: SequentialScale,
}


def column_continuity(columns: Sequence[str], data: ChartData) -> list[bool]:
    """Continuity flag per column; unknown columns count as not continuous."""
    out = []
    for key in columns:
        column = data.column(key)
        out.append(bool(column is not None and column.is_continuous))
    return out


def is_temporal(columns: Sequence[str], data: ChartData) -> bool:
    """True when the first non-null value of any of the columns is a datetime."""
    for key in columns:
        for row in data.rows:
            value = row.get(key)
            if value is not None:
                if is_value_date(value):
                    return True
                break
    return False


def stack_extent(columns: Sequence[str], data: ChartData) -> tuple[float, float]:
    """
    Extent of the running per-row sums of the columns, including the zero baseline.

    Null cells count as 0.

    Raises:
        StackError: If any non-null value is not a number.

    Examples:
        >>> data = ChartData([{"a": 1, "b": 2}, {"a": -4, "b": None}], [{"key": "a"}, {"key": "b"}])
        >>> stack_extent(["a", "b"], data)
        (-4, 3)
    """
    lo = hi = 0
    for row in data.rows:
        total = 0
        for key in columns:
            value = row.get(key)
            if value is None:
                continue
            if not is_value_number(value):
                raise StackError(f"Stacked columns must be numerical: {', '.join(columns)}")
            total += value
            lo = min(lo, total)
            hi = max(hi, total)
    return lo, hi


def _continuous_domain(
    columns: Sequence[str], data: ChartData, *, zero: bool, stack: bool, temporal: bool
) -> tuple[Any, Any]:
    if stack:
        lo, hi = stack_extent(columns, data)
    else:
        lo, hi = data.extent(list(columns))
    if zero and not temporal:
        lo = 0
    if lo is None or hi is None:
        return 0, 0
    return lo, hi


def _build(kind: ScaleKind, domain: Sequence[Any], rng: tuple[float, float], settings: ChartSettings) -> Scale:
    if kind in _CONTINUOUS_FACTORIES:
        return _CONTINUOUS_FACTORIES[kind](domain=tuple(domain), range=rng, clamp=settings.clamp)
    if kind is ScaleKind.BAND:
        return BandScale(
            domain=tuple(domain),
            range=rng,
            padding_inner=settings.band_padding_inner,
            padding_outer=settings.band_padding_outer,
            align=settings.band_align,
            rounded=settings.band_round,
        )
    if kind is ScaleKind.POINT:
        return PointScale(
            domain=tuple(domain),
            range=rng,
            padding_outer=settings.band_padding_outer,
            align=settings.band_align,
            rounded=settings.band_round,
        )
    return OrdinalScale(domain=tuple(domain), range=rng)


def create_scale(
    config: DimensionDefinition, data: ChartData, settings: ChartSettings | None = None
) -> Scale:
    """
    Build the scale for one dimension.

    Args:
        config (DimensionConfig | Mapping): Dimension definition.
        data (ChartData): Source container.
        settings (ChartSettings | None): Scale defaults; falls back to data.settings.

    Returns:
        Scale: The built scale, after config.update_scale if supplied.

    Raises:
        MixedContinuityError: If the columns mix continuous and categorical data.
        StackError: If stack is set and a column holds non-numeric values.
        ScaleError: If a continuous scale kind is requested for categorical columns.
        pydantic.ValidationError: If a mapping config is malformed.

    Examples:
        >>> data = ChartData([{"foo": 1}, {"foo": 2}, {"foo": 3}], [{"key": "foo"}])
        >>> create_scale({"columns": ["foo"], "range": [0, 1]}, data).domain
        (1, 3)
        >>> create_scale({"columns": ["foo"], "range": [0, 1], "zero": True}, data).domain
        (0, 3)
    """
    cfg = as_dimension_config(config)
    settings = settings or data.settings
    columns = cfg.columns

    continuity = column_continuity(columns, data)
    if len(set(continuity)) > 1:
        raise MixedContinuityError(
            f"A scale cannot share continuous and non continuous data: {', '.join(columns)}"
        )
    continuous = continuity[0]
    temporal = is_temporal(columns, data)

    kind = cfg.scale_type or (
        ScaleKind.TIME if temporal else ScaleKind.LINEAR if continuous else ScaleKind.BAND
    )

    if kind in CONTINUOUS_KINDS:
        if not continuous and all(data.column(c) is not None for c in columns):
            raise ScaleError(
                f"A {kind.value} scale needs continuous data: {', '.join(columns)}"
            )
        domain: Sequence[Any] = _continuous_domain(
            columns, data, zero=cfg.zero, stack=cfg.stack, temporal=temporal
        )
    else:
        if cfg.stack:
            stack_extent(columns, data)
        domain = data.get_unique_values(list(columns)) or ()

    logger.debug("Creating %s scale for %s with domain %r", kind.value, ", ".join(columns), domain)
    scale = _build(kind, domain, cfg.range, settings)
    if cfg.update_scale is not None:
        scale = cfg.update_scale(scale)
    return scale
