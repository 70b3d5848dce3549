"""
pnut.scale — scale families and the dimension pipeline.

## Responsibilities
- ScaleKind grammar and parsing of d3-style names ("scaleLinear").
- Continuous scales (linear, log, pow, sqrt, time, sequential) and categorical
  scales (band, point, ordinal) as frozen dataclasses.
- DimensionConfig validation, create_scale() and use_scales().

## Import DAG discipline
- Depends on pnut.core and pnut.data.

## Examples
```python
from pnut.data import ChartData
from pnut.scale import use_scales
data = ChartData([{"fruit": "apple", "n": 3}, {"fruit": "pear", "n": 5}], [{"key": "fruit"}, {"key": "n"}])
x, y = use_scales([
    {"columns": ["fruit"], "range": [0, 200], "dimension": "x"},
    {"columns": ["n"], "range": [0, 100], "zero": True, "dimension": "y"},
])(data)
x.scale.bandwidth()  # 100.0
y.scaled_data  # ((40.0,), (0.0,))
```
"""

from __future__ import annotations

from .categorical import BandScale, OrdinalScale, PointScale
from .config import DimensionConfig
from .continuous import (
    ContinuousScale,
    LinearScale,
    LogScale,
    PowScale,
    SequentialScale,
    SqrtScale,
    TimeScale,
)
from .create import Scale, create_scale
from .grammar import ScaleKind, scale_kind_from_value
from .pipeline import Layout, ScaledDimension, apply_scaled_value, layout, use_scales

__all__ = [
    "ScaleKind",
    "scale_kind_from_value",
    "ContinuousScale",
    "LinearScale",
    "LogScale",
    "PowScale",
    "SqrtScale",
    "TimeScale",
    "SequentialScale",
    "BandScale",
    "PointScale",
    "OrdinalScale",
    "Scale",
    "DimensionConfig",
    "create_scale",
    "use_scales",
    "ScaledDimension",
    "apply_scaled_value",
    "Layout",
    "layout",
]
