"""
Core utilities shared by pnut.data and pnut.scale.

## Contents
- values — validity/continuity/date rules, epoch conversions, interpolation primitives.
- ticks — d3-array style tick steps and domain nicing.
- diagnostics — Diagnostic records, DiagnosticLog collector, report().
- errors — ChartError hierarchy for hard (programmer) errors.
- config — ChartSettings with env > TOML > defaults precedence.
- constants — default values (single source of truth for ChartSettings).
- logging_config — setup_logging() for applications embedding pnut.
- typing — shared type aliases.

## Notes
- Zero-IO policy, except ChartSettings.load() which reads env and TOML files on request.
- Nothing here imports pnut.data or pnut.scale.

## Examples
```python
from pnut.core import DiagnosticLog, interpolate
log = DiagnosticLog()
interpolate(10, 20, 0.1)  # 11.0
interpolate(10, 20, 2, sink=log)  # None; log.codes() == ["invalid_blend"]
```
"""

from __future__ import annotations

from .config import ChartSettings
from .diagnostics import Diagnostic, DiagnosticLog, DiagnosticSink
from .errors import (
    BinError,
    ChartConfigError,
    ChartError,
    MixedContinuityError,
    ScaleError,
    StackError,
)
from .logging_config import setup_logging
from .values import interpolate, interpolate_discrete, is_value_continuous, is_value_date, is_value_valid

__all__ = [
    "ChartSettings",
    "Diagnostic",
    "DiagnosticLog",
    "DiagnosticSink",
    "ChartError",
    "ScaleError",
    "MixedContinuityError",
    "StackError",
    "BinError",
    "ChartConfigError",
    "setup_logging",
    "interpolate",
    "interpolate_discrete",
    "is_value_continuous",
    "is_value_date",
    "is_value_valid",
]
