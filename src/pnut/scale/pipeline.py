"""
Scale pipeline: dimension configs + ChartData -> scales and scaled row values.

use_scales() validates its configs up front and returns a function of a
ChartData, so the same dimension list can be applied to successive containers
(e.g. animation frames). Nothing is cached between calls.

Examples:
    >>> from pnut.data import ChartData
    >>> from pnut.scale import use_scales
    >>> data = ChartData([{"foo": 1}, {"foo": 2}, {"foo": 3}, {"foo": 4}], [{"key": "foo"}])
    >>> [foo] = use_scales([{"columns": ["foo"], "range": [0, 100], "zero": True}])(data)
    >>> [row[0] for row in foo.scaled_data]
    [25.0, 50.0, 75.0, 100.0]
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from pnut.core.config import ChartSettings
from pnut.core.values import is_value_number
from pnut.data.chart_data import ChartData

from .categorical import BandScale
from .config import DimensionConfig, DimensionDefinition, as_dimension_config
from .create import Scale, create_scale

__all__ = [
    "ScaledDimension",
    "Layout",
    "use_scales",
    "apply_scaled_value",
    "half_bandwidth",
    "layout",
]


@dataclass(frozen=True)
class ScaledDimension:
    """
    Result for one dimension config.

    Attributes:
        scale (Scale): The built scale.
        scaled_data (tuple[tuple, ...]): One entry per row, each holding one value per
            config column. Stacked dimensions hold (lower, upper) pairs per column.
        config (DimensionConfig): The validated config that produced this entry.
    """

    scale: Scale
    scaled_data: tuple[tuple[Any, ...], ...]
    config: DimensionConfig


def half_bandwidth(scale: Any) -> float:
    """Half the band width for band/point scales, 0 for every other scale."""
    if isinstance(scale, BandScale):
        return scale.bandwidth() / 2
    return 0


def apply_scaled_value(
    dimension: str | None, scale: Scale, value: Any, height: float | None = None
) -> Any:
    """
    Apply a scale the way a dimension positions marks on screen.

    Args:
        dimension (str | None): ``"x"`` adds half a bandwidth; ``"y"`` returns
            ``height - (scale(value) + half bandwidth)``; anything else returns
            ``scale(value)``.
        scale (Scale): Scale to apply.
        value (Any): Source value; None passes through as None.
        height (float | None): Container height for ``"y"``; defaults to the largest
            value of the scale's range.

    Examples:
        >>> from pnut.scale.categorical import BandScale
        >>> band = BandScale(domain=(1,), range=(0, 1))
        >>> apply_scaled_value("x", band, 1), apply_scaled_value("y", band, 1, height=100)
        (0.5, 99.5)
        >>> apply_scaled_value(None, band, None) is None
        True
    """
    if value is None:
        return None
    scaled = scale(value)
    if scaled is None or not is_value_number(scaled):
        return scaled
    if dimension == "x":
        return scaled + half_bandwidth(scale)
    if dimension == "y":
        if height is None:
            height = max(scale.range)
        return height - (scaled + half_bandwidth(scale))
    return scaled


def _scale_row(
    row: Any, cfg: DimensionConfig, scale: Scale, height: float | None
) -> tuple[Any, ...]:
    if not cfg.stack:
        return tuple(
            apply_scaled_value(cfg.dimension, scale, row.get(key), height) for key in cfg.columns
        )
    out = []
    total = 0
    for key in cfg.columns:
        value = row.get(key)
        if value is None:
            out.append((None, None))
            continue
        lower = apply_scaled_value(cfg.dimension, scale, total, height)
        total += value
        upper = apply_scaled_value(cfg.dimension, scale, total, height)
        out.append((lower, upper))
    return tuple(out)


def use_scales(
    configs: Iterable[DimensionDefinition], settings: ChartSettings | None = None
) -> Callable[[ChartData], list[ScaledDimension]]:
    """
    Build a function that derives one scale per dimension config for a ChartData.

    Args:
        configs: DimensionConfig instances or mappings (validated immediately).
        settings (ChartSettings | None): Scale defaults; falls back to each
            container's settings.

    Returns:
        Callable[[ChartData], list[ScaledDimension]]: Results in config order.

    Raises:
        pydantic.ValidationError: If a config mapping is malformed (raised here,
            before any data is seen).
        MixedContinuityError, StackError, ScaleError: From create_scale(), when the
            returned function is applied.
    """
    validated = [as_dimension_config(c) for c in configs]

    def apply(data: ChartData) -> list[ScaledDimension]:
        dimensions: list[ScaledDimension] = []
        for cfg in validated:
            scale = create_scale(cfg, data, settings)
            height = cfg.height
            if cfg.dimension == "y" and height is None:
                height = max(cfg.range)
            scaled = tuple(_scale_row(row, cfg, scale, height) for row in data.rows)
            dimensions.append(ScaledDimension(scale=scale, scaled_data=scaled, config=cfg))
        return dimensions

    return apply


@dataclass(frozen=True)
class Layout:
    """
    Inner chart area after padding.

    Attributes:
        width (float): Inner width.
        height (float): Inner height.
        padding (dict[str, float]): top/bottom/left/right padding.
        x_range (tuple[float, float]): (0, width).
        y_range (tuple[float, float]): (height, 0), bottom-up for screen space.
    """

    width: float
    height: float
    padding: dict[str, float]
    x_range: tuple[float, float]
    y_range: tuple[float, float]


def layout(
    width: float = 0,
    height: float = 0,
    top: float = 0,
    bottom: float = 0,
    left: float = 0,
    right: float = 0,
) -> Layout:
    """
    Compute the inner drawing area and axis ranges for a padded chart.

    Examples:
        >>> box = layout(width=400, height=300, top=10, bottom=20, left=30, right=10)
        >>> box.width, box.height, box.x_range, box.y_range
        (360, 270, (0, 360), (270, 0))
    """
    inner_width = width - left - right
    inner_height = height - top - bottom
    return Layout(
        width=inner_width,
        height=inner_height,
        padding={"top": top, "bottom": bottom, "left": left, "right": right},
        x_range=(0, inner_width),
        y_range=(inner_height, 0),
    )
