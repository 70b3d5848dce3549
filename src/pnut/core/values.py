"""
Value rules shared by the data container and the scale pipeline.

Responsibilities
- Decide which raw values are valid chart scalars and sanitize everything else to None.
- Classify values as continuous (numbers, datetimes) or temporal (datetimes).
- Convert datetimes to and from epoch milliseconds for arithmetic.
- Provide the interpolation primitives used for animated frames.

Notes
- bool is rejected even though it subclasses int.
- NaN floats are treated as missing and become None.
- datetime.date values are promoted to a midnight datetime on ingest.
- Naive datetimes are measured against a naive epoch, aware ones against UTC, so
  conversions never depend on the local timezone.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any

from .diagnostics import INVALID_BLEND, DiagnosticSink, report
from .typing import ChartScalar

__all__ = [
    "is_value_valid",
    "is_value_number",
    "is_value_continuous",
    "is_value_date",
    "sanitize_value",
    "to_epoch_ms",
    "from_epoch_ms",
    "interpolate",
    "interpolate_discrete",
]

_EPOCH_NAIVE = datetime(1970, 1, 1)
_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)


def is_value_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and not (isinstance(value, float) and math.isnan(value))
    )


def is_value_date(value: Any) -> bool:
    return isinstance(value, datetime)


def is_value_valid(value: Any) -> bool:
    """
    True iff value is a str, a non-NaN number, a datetime, or None.

    Examples:
        >>> is_value_valid("a"), is_value_valid(1.5), is_value_valid(None)
        (True, True, True)
        >>> is_value_valid(True), is_value_valid({}), is_value_valid(float("nan"))
        (False, False, False)
    """
    return value is None or isinstance(value, str) or is_value_number(value) or is_value_date(value)


def is_value_continuous(value: Any) -> bool:
    """True iff value has an intrinsic order that supports interpolation (number or datetime)."""
    return is_value_number(value) or is_value_date(value)


def sanitize_value(value: Any) -> ChartScalar:
    """Return value if valid, a promoted datetime for plain dates, and None otherwise."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    return value if is_value_valid(value) else None


def to_epoch_ms(value: datetime) -> float:
    epoch = _EPOCH_NAIVE if value.tzinfo is None else _EPOCH_UTC
    return (value - epoch) / timedelta(milliseconds=1)


def from_epoch_ms(ms: float, like: datetime | None = None) -> datetime:
    """Rebuild a datetime from epoch milliseconds, matching the tzinfo of `like`."""
    tz = like.tzinfo if like is not None else None
    if tz is None:
        return _EPOCH_NAIVE + timedelta(milliseconds=ms)
    return (_EPOCH_UTC + timedelta(milliseconds=ms)).astimezone(tz)


def _blend_error(blend: float, sink: DiagnosticSink | None) -> bool:
    if not 0 <= blend <= 1:
        report(INVALID_BLEND, "blend must be from 0 to 1 inclusive", sink=sink)
        return True
    return False


def interpolate(
    value_a: ChartScalar,
    value_b: ChartScalar,
    blend: float,
    *,
    sink: DiagnosticSink | None = None,
) -> ChartScalar:
    """
    Interpolate between two chart scalars.

    Args:
        value_a: Value at blend 0.
        value_b: Value at blend 1.
        blend (float): Position between the values, in [0, 1].
        sink: Optional diagnostic sink for out-of-range blends.

    Returns:
        The interpolated value. Numbers are lerped, datetimes are lerped on epoch
        milliseconds, anything non-continuous falls back to interpolate_discrete().
        None when either value is None or blend is out of range.

    Examples:
        >>> interpolate(10, 20, 0.1)
        11.0
        >>> interpolate("a", "b", 0.6)
        'b'
    """
    if _blend_error(blend, sink):
        return None
    if blend == 0:
        return value_a
    if blend == 1:
        return value_b
    if value_a is None or value_b is None:
        return None
    if not is_value_continuous(value_a) or not is_value_continuous(value_b):
        return interpolate_discrete(value_a, value_b, blend, sink=sink)
    if is_value_date(value_a) or is_value_date(value_b):
        a = to_epoch_ms(value_a) if is_value_date(value_a) else float(value_a)
        b = to_epoch_ms(value_b) if is_value_date(value_b) else float(value_b)
        like = value_a if is_value_date(value_a) else value_b
        return from_epoch_ms(a * (1 - blend) + b * blend, like=like)
    return value_a * (1 - blend) + value_b * blend


def interpolate_discrete(
    value_a: ChartScalar,
    value_b: ChartScalar,
    blend: float,
    *,
    sink: DiagnosticSink | None = None,
) -> ChartScalar:
    """
    Pick value_a when blend < 0.5, otherwise value_b.

    Examples:
        >>> interpolate_discrete("a", "b", 0.4), interpolate_discrete("a", "b", 0.5)
        ('a', 'b')
    """
    if _blend_error(blend, sink):
        return None
    return value_a if blend < 0.5 else value_b
