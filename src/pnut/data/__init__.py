"""
pnut.data — the tabular data container.

## Responsibilities
- ChartData: immutable rows + Column metadata, memoized pooled aggregations,
  frames and fractional frame interpolation, histogram binning, Polars interop.
- Column: validated column descriptor with continuity inference.

## Import DAG discipline
- Depends on stdlib, polars, pydantic and pnut.core only.
- MUST NOT import pnut.scale.

## Examples
```python
from pnut.data import ChartData
data = ChartData(
    [{"day": 1, "demand": 99}, {"day": 2, "demand": 4}],
    [{"key": "day"}, {"key": "demand", "label": "Demand"}],
)
data.summary("demand")["median"]  # 51.5
data.bin("demand", thresholds=[50]).rows  # two bins
```
"""

from __future__ import annotations

from .chart_data import ChartData
from .column import Column

__all__ = [
    "ChartData",
    "Column",
]
