"""
Dimension configuration for the scale pipeline.

A DimensionConfig binds one or more data columns to a pixel-space range and
optionally pins the scale family, forces a zero baseline, stacks the columns,
or post-processes the built scale. Configs are validated eagerly; camelCase keys
(``scaleType``, ``updateScale``) are accepted so configs written for JavaScript
charting libraries validate unchanged.

Examples:
    >>> from pnut.scale.config import DimensionConfig
    >>> cfg = DimensionConfig.model_validate({"columns": ["foo"], "range": [0, 100], "scaleType": "scaleLinear"})
    >>> cfg.columns, cfg.range, cfg.scale_type.value
    (('foo',), (0.0, 100.0), 'linear')
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .grammar import ScaleKind, scale_kind_from_value

__all__ = ["DimensionConfig", "DimensionDefinition", "as_dimension_config"]


class DimensionConfig(BaseModel):
    """
    One visual dimension of a chart.

    Attributes:
        columns (tuple[str, ...]): Column keys feeding this dimension (at least one).
        range (tuple[float, float]): Output extent in pixel space.
        scale_type (ScaleKind | None): Explicit scale family; inferred when None.
        update_scale (Callable | None): Receives the built scale and returns the scale
            to use (e.g. ``lambda s: s.nice()``).
        zero (bool): Start continuous domains at 0 instead of the minimum.
        stack (bool): Stack the columns per row; the domain covers the running sums.
        dimension (str | None): Visual axis name. ``"x"`` adds half a bandwidth to
            scaled values, ``"y"`` also flips them into screen space.
        height (float | None): Container height used by ``"y"`` flips; defaults to
            the largest range value.

    Notes:
        A plain string for ``columns`` is read as a single column.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    columns: tuple[str, ...] = Field(..., min_length=1)
    range: tuple[float, float] = (0.0, 1.0)
    scale_type: ScaleKind | None = Field(
        default=None, validation_alias=AliasChoices("scale_type", "scaleType")
    )
    update_scale: Callable[[Any], Any] | None = Field(
        default=None, validation_alias=AliasChoices("update_scale", "updateScale")
    )
    zero: bool = False
    stack: bool = False
    dimension: str | None = None
    height: float | None = None

    @field_validator("columns", mode="before")
    @classmethod
    def _single_column(cls, v: Any) -> Any:
        if isinstance(v, str):
            return (v,)
        return v

    @field_validator("scale_type", mode="before")
    @classmethod
    def _normalize_scale_type(cls, v: Any) -> Any:
        """
        Normalize scale_type using grammar.scale_kind_from_value.

        Raises:
            ChartConfigError: If the name is not a known scale kind (surfaces as a
                pydantic ValidationError).
        """
        if v is None:
            return v
        return scale_kind_from_value(v)


DimensionDefinition = DimensionConfig | Mapping[str, Any]


def as_dimension_config(definition: DimensionDefinition) -> DimensionConfig:
    """Return definition unchanged if it is a DimensionConfig, else validate it into one."""
    if isinstance(definition, DimensionConfig):
        return definition
    return DimensionConfig.model_validate(definition)
