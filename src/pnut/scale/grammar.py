"""
Scale kinds and helpers.

Enum values are lower_snake (``"linear"``, ``"band"``, ...). For convenience the
parser also accepts d3-style factory names (``"scaleLinear"``), upper case, and
``scale_`` prefixed spellings, so dimension configs written against JavaScript
charting libraries validate unchanged.

Examples:
    >>> from pnut.scale.grammar import ScaleKind, scale_kind_from_value
    >>> scale_kind_from_value("scaleBand") is ScaleKind.BAND
    True
    >>> scale_kind_from_value("LINEAR").value
    'linear'
    >>> ScaleKind.TIME in CONTINUOUS_KINDS
    True
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

from pnut.core.errors import ChartConfigError

__all__ = [
    "ScaleKind",
    "CONTINUOUS_KINDS",
    "CATEGORICAL_KINDS",
    "scale_kind_from_value",
    "is_continuous_kind",
]


class ScaleKind(Enum):
    """
    Scale families produced by the pipeline.

    Notes:
        LINEAR, LOG, POW, SQRT, TIME and SEQUENTIAL map a continuous domain;
        BAND, POINT and ORDINAL map a discrete list of values.
    """

    LINEAR = "linear"
    LOG = "log"
    POW = "pow"
    SQRT = "sqrt"
    TIME = "time"
    SEQUENTIAL = "sequential"
    BAND = "band"
    POINT = "point"
    ORDINAL = "ordinal"


CONTINUOUS_KINDS: Final[frozenset[ScaleKind]] = frozenset(
    {
        ScaleKind.LINEAR,
        ScaleKind.LOG,
        ScaleKind.POW,
        ScaleKind.SQRT,
        ScaleKind.TIME,
        ScaleKind.SEQUENTIAL,
    }
)
CATEGORICAL_KINDS: Final[frozenset[ScaleKind]] = frozenset(
    {ScaleKind.BAND, ScaleKind.POINT, ScaleKind.ORDINAL}
)

_PREFIX_RE: Final[re.Pattern[str]] = re.compile(r"^scale_?", re.IGNORECASE)


def scale_kind_from_value(value: str | ScaleKind) -> ScaleKind:
    """
    Parse a scale kind from an enum member or a free-form name.

    Args:
        value (str | ScaleKind): e.g. "linear", "scaleLinear", "scale_time", ScaleKind.BAND.

    Returns:
        ScaleKind: Parsed kind.

    Raises:
        ChartConfigError: If the name does not match a known scale kind.
    """
    if isinstance(value, ScaleKind):
        return value
    name = _PREFIX_RE.sub("", (value or "").strip()).lower()
    allowed = {k.value for k in ScaleKind}
    if name not in allowed:
        raise ChartConfigError(f"scale_type must be one of {sorted(allowed)} (got {value!r})")
    return ScaleKind(name)


def is_continuous_kind(kind: ScaleKind) -> bool:
    return kind in CONTINUOUS_KINDS
