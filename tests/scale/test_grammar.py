from __future__ import annotations

import pytest

from pnut.core.errors import ChartConfigError
from pnut.scale.grammar import (
    CATEGORICAL_KINDS,
    CONTINUOUS_KINDS,
    ScaleKind,
    is_continuous_kind,
    scale_kind_from_value,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("linear", ScaleKind.LINEAR),
        ("scaleLinear", ScaleKind.LINEAR),
        ("scale_time", ScaleKind.TIME),
        ("SCALEBAND", ScaleKind.BAND),
        ("  point ", ScaleKind.POINT),
        ("scaleOrdinal", ScaleKind.ORDINAL),
        (ScaleKind.SQRT, ScaleKind.SQRT),
    ],
)
def test_scale_kind_from_value(value, expected) -> None:
    assert scale_kind_from_value(value) is expected


@pytest.mark.parametrize("value", ["", "scale", "scaleQuantize", "bandy"])
def test_scale_kind_from_value_rejects_unknown_names(value) -> None:
    with pytest.raises(ChartConfigError):
        scale_kind_from_value(value)


def test_kind_families_partition_the_enum() -> None:
    assert CONTINUOUS_KINDS | CATEGORICAL_KINDS == set(ScaleKind)
    assert not CONTINUOUS_KINDS & CATEGORICAL_KINDS
    assert is_continuous_kind(ScaleKind.LOG)
    assert not is_continuous_kind(ScaleKind.BAND)


def test_enum_values_are_lower_snake() -> None:
    for kind in ScaleKind:
        assert kind.value == kind.name.lower()
