"""
Lightweight typing aliases used across the data container and scale pipeline.

This module contains no runtime logic.

Examples:
    >>> from pnut.core.typing import ChartScalar, ColumnArg
    >>> def first(values: list[ChartScalar]) -> ChartScalar:
    ...     return values[0] if values else None
    >>> first([3, "a"])
    3
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Union

__all__ = [
    "ChartScalar",
    "ChartRow",
    "RowDefinition",
    "ColumnArg",
]

# A sanitized cell value.
ChartScalar = Union[int, float, str, datetime, None]

# Rows are exposed as read-only mappings from column key to value.
ChartRow = Mapping[str, Any]

# Raw rows as supplied by callers, before sanitization.
RowDefinition = Mapping[str, Any]

# Aggregations accept a single key or a sequence of keys.
ColumnArg = Union[str, Sequence[str]]
