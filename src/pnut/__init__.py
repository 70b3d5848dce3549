"""
pnut — chart data and scale computation.

## Layers
- pnut.core — value rules, ticks, diagnostics, errors, settings, logging.
- pnut.data — ChartData container and Column descriptors.
- pnut.scale — scale families, DimensionConfig and the use_scales() pipeline.

## Examples
```python
from pnut import ChartData, DiagnosticLog, use_scales
log = DiagnosticLog()
data = ChartData([{"supply": 12, "demand": 99}, {"supply": 32, "demand": 4}],
                 [{"key": "supply"}, {"key": "demand"}], diagnostics=log)
data.max(["supply", "demand"])  # 99
data.min("missing")  # None; log.codes() == ["column_not_found"]
[dim] = use_scales([{"columns": ["supply"], "range": [0, 100], "zero": True}])(data)
```
"""

from __future__ import annotations

from .core import ChartSettings, Diagnostic, DiagnosticLog, setup_logging
from .core.errors import (
    BinError,
    ChartConfigError,
    ChartError,
    MixedContinuityError,
    ScaleError,
    StackError,
)
from .data import ChartData, Column
from .scale import DimensionConfig, ScaleKind, create_scale, layout, use_scales

__all__ = [
    "ChartData",
    "Column",
    "ChartSettings",
    "Diagnostic",
    "DiagnosticLog",
    "setup_logging",
    "DimensionConfig",
    "ScaleKind",
    "create_scale",
    "use_scales",
    "layout",
    "ChartError",
    "ScaleError",
    "MixedContinuityError",
    "StackError",
    "BinError",
    "ChartConfigError",
]
