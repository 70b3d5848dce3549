"""
Continuous scales: linear, log, pow/sqrt, time and sequential.

Each scale is a frozen dataclass mapping a two-point domain onto a two-point
range. Calling the scale maps a value; helpers such as with_domain(), nice() and
with_clamp() return new instances instead of mutating.

Notes
- Values the scale cannot map (None, strings, non-positive values on a positive
  log domain) return None rather than NaN.
- A degenerate domain (d0 == d1) maps every value to the middle of the range.
- TimeScale works on epoch milliseconds internally and accepts numbers as epoch
  milliseconds on input.

Examples:
    >>> from pnut.scale.continuous import LinearScale
    >>> scale = LinearScale(domain=(0, 4), range=(0, 100))
    >>> scale(1), scale.invert(50)
    (25.0, 2.0)
    >>> scale.with_domain((3, 97)).nice(5).domain
    (0, 100)
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from pnut.core.constants import DEFAULT_TICK_COUNT
from pnut.core.ticks import nice_domain, tick_step, ticks
from pnut.core.values import from_epoch_ms, is_value_date, is_value_number, to_epoch_ms

__all__ = [
    "ContinuousScale",
    "LinearScale",
    "LogScale",
    "PowScale",
    "SqrtScale",
    "TimeScale",
    "SequentialScale",
]


@dataclass(frozen=True)
class ContinuousScale:
    """
    Base for scales over an ordered, two-point domain.

    Attributes:
        domain (tuple): (d0, d1) input extent.
        range (tuple[float, float]): (r0, r1) output extent.
        clamp (bool): Clamp output (and inverted input) to the extents.
    """

    domain: tuple[Any, Any] = (0.0, 1.0)
    range: tuple[float, float] = (0.0, 1.0)
    clamp: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", tuple(self.domain))
        object.__setattr__(self, "range", tuple(self.range))
        if len(self.domain) != 2 or len(self.range) != 2:
            raise ValueError("continuous scales take a two-point domain and range")

    # Hooks: value <-> number <-> transformed number.

    def _to_number(self, value: Any) -> float | None:
        # Datetimes count as epoch milliseconds on every continuous scale.
        if is_value_date(value):
            return to_epoch_ms(value)
        return float(value) if is_value_number(value) else None

    def _from_number(self, number: float) -> Any:
        return number

    def _numeric_domain(self) -> tuple[float, float]:
        d0, d1 = (self._to_number(d) for d in self.domain)
        return d0, d1  # type: ignore[return-value]

    def _transform(self, x: float) -> float:
        return x

    def _untransform(self, x: float) -> float:
        return x

    def _forward(self, value: Any) -> float | None:
        number = self._to_number(value)
        if number is None:
            return None
        x = self._transform(number)
        return None if math.isnan(x) else x

    def normalize(self, value: Any) -> float | None:
        """Position of value within the domain, 0 at d0 and 1 at d1 (0.5 for a degenerate domain)."""
        x = self._forward(value)
        if x is None:
            return None
        a = self._transform(self._to_number(self.domain[0]))  # type: ignore[arg-type]
        b = self._transform(self._to_number(self.domain[1]))  # type: ignore[arg-type]
        t = 0.5 if b == a else (x - a) / (b - a)
        if self.clamp:
            t = min(1.0, max(0.0, t))
        return t

    def __call__(self, value: Any) -> Any:
        t = self.normalize(value)
        if t is None:
            return None
        r0, r1 = self.range
        return r0 * (1 - t) + r1 * t

    def invert(self, pixel: float) -> Any:
        """Map a range value back into the domain."""
        if not is_value_number(pixel):
            return None
        r0, r1 = self.range
        t = 0.5 if r1 == r0 else (pixel - r0) / (r1 - r0)
        if self.clamp:
            t = min(1.0, max(0.0, t))
        a = self._transform(self._to_number(self.domain[0]))  # type: ignore[arg-type]
        b = self._transform(self._to_number(self.domain[1]))  # type: ignore[arg-type]
        return self._from_number(self._untransform(a * (1 - t) + b * t))

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> list[Any]:
        d0, d1 = self._numeric_domain()
        return [self._from_number(t) for t in ticks(d0, d1, count)]

    def nice(self, count: int = DEFAULT_TICK_COUNT) -> ContinuousScale:
        """Extend the domain to whole tick steps."""
        d0, d1 = nice_domain(*self._numeric_domain(), count)
        return replace(self, domain=(d0, d1))

    def with_domain(self, domain: tuple[Any, Any]) -> ContinuousScale:
        return replace(self, domain=tuple(domain))

    def with_range(self, range: tuple[float, float]) -> ContinuousScale:
        return replace(self, range=tuple(range))

    def with_clamp(self, clamp: bool = True) -> ContinuousScale:
        return replace(self, clamp=clamp)


@dataclass(frozen=True)
class LinearScale(ContinuousScale):
    """Identity transform: y = r0 + (x - d0) / (d1 - d0) * (r1 - r0)."""


@dataclass(frozen=True)
class LogScale(ContinuousScale):
    """
    Logarithmic scale.

    The domain must not cross zero. A negative domain is handled by mirroring
    (-log(-x)), as d3 does.
    """

    domain: tuple[Any, Any] = (1.0, 10.0)
    base: float = 10.0

    def _log(self, x: float) -> float:
        if self.base == 10:
            return math.log10(x)
        if self.base == 2:
            return math.log2(x)
        return math.log(x) / math.log(self.base)

    def _negative(self) -> bool:
        d0 = self._to_number(self.domain[0])
        return d0 is not None and d0 < 0

    def _transform(self, x: float) -> float:
        if self._negative():
            return -self._log(-x) if x < 0 else math.nan
        return self._log(x) if x > 0 else math.nan

    def _untransform(self, x: float) -> float:
        return -(self.base**-x) if self._negative() else self.base**x

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> list[Any]:
        d0, d1 = self._numeric_domain()
        lo, hi = sorted((d0, d1))
        if lo <= 0:
            return ticks(d0, d1, count)
        i, j = math.floor(self._log(lo)), math.ceil(self._log(hi))
        # Whole powers only; short spans fall back to linear ticks.
        if j - i < 2:
            return ticks(d0, d1, count)
        out = [p for p in (self.base**k for k in range(i, j + 1)) if lo <= p <= hi]
        return out if d0 <= d1 else out[::-1]

    def nice(self, count: int = DEFAULT_TICK_COUNT) -> LogScale:
        d0, d1 = self._numeric_domain()
        a = self._transform(d0)
        b = self._transform(d1)
        if math.isnan(a) or math.isnan(b):
            return self
        lo, hi = (math.floor(a), math.ceil(b)) if a <= b else (math.ceil(a), math.floor(b))
        return replace(self, domain=(self._untransform(lo), self._untransform(hi)))


@dataclass(frozen=True)
class PowScale(ContinuousScale):
    """Power scale: sign(x) * |x| ** exponent."""

    exponent: float = 1.0

    def _transform(self, x: float) -> float:
        return math.copysign(abs(x) ** self.exponent, x)

    def _untransform(self, x: float) -> float:
        return math.copysign(abs(x) ** (1 / self.exponent), x)

    def with_exponent(self, exponent: float) -> PowScale:
        return replace(self, exponent=exponent)


@dataclass(frozen=True)
class SqrtScale(PowScale):
    exponent: float = 0.5


# Fixed-duration tick intervals for time scales, in milliseconds.
_SECOND = 1000
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_TIME_INTERVALS: tuple[int, ...] = (
    _SECOND,
    5 * _SECOND,
    15 * _SECOND,
    30 * _SECOND,
    _MINUTE,
    5 * _MINUTE,
    15 * _MINUTE,
    30 * _MINUTE,
    _HOUR,
    3 * _HOUR,
    6 * _HOUR,
    12 * _HOUR,
    _DAY,
    2 * _DAY,
    7 * _DAY,
    30 * _DAY,
    90 * _DAY,
)
_YEAR = 365 * _DAY


@dataclass(frozen=True)
class TimeScale(ContinuousScale):
    """
    Linear scale over datetimes.

    Naive and timezone-aware datetimes are both supported; inverted values carry
    the tzinfo of the first domain value.
    """

    domain: tuple[Any, Any] = (datetime(2000, 1, 1), datetime(2000, 1, 2))

    def __post_init__(self) -> None:
        super().__post_init__()
        # Numbers in the domain are read as epoch milliseconds.
        domain = tuple(
            from_epoch_ms(float(d)) if is_value_number(d) else d for d in self.domain
        )
        object.__setattr__(self, "domain", domain)

    def _like(self) -> datetime | None:
        first = self.domain[0]
        return first if is_value_date(first) else None

    def _from_number(self, number: float) -> datetime:
        return from_epoch_ms(number, like=self._like())

    def _interval(self, count: int) -> int | None:
        d0, d1 = (self._to_number(d) for d in self.domain)
        target = abs(d1 - d0) / max(1, count)  # type: ignore[operator]
        if target >= _YEAR:
            return None
        # Closest interval by ratio.
        return min(_TIME_INTERVALS, key=lambda ms: abs(math.log(ms / target)) if target > 0 else ms)

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> list[datetime]:
        d0, d1 = (self._to_number(d) for d in self.domain)
        lo, hi = min(d0, d1), max(d0, d1)  # type: ignore[type-var]
        interval = self._interval(count)
        if interval is None:
            first, last = self._from_number(lo).year, self._from_number(hi).year
            step = max(1, int(tick_step(first, last, count)))
            years = range(math.ceil(first / step) * step, last + 1, step)
            start = self._from_number(lo)
            out = [start.replace(year=y, month=1, day=1, hour=0, minute=0, second=0, microsecond=0) for y in years]
            out = [d for d in out if lo <= self._to_number(d) <= hi]  # type: ignore[operator]
        else:
            k = math.ceil(lo / interval)
            out = []
            while k * interval <= hi:
                out.append(self._from_number(k * interval))
                k += 1
        return out if d0 <= d1 else out[::-1]  # type: ignore[operator]

    def nice(self, count: int = DEFAULT_TICK_COUNT) -> TimeScale:
        """Extend the domain outward to whole tick intervals."""
        d0, d1 = (self._to_number(d) for d in self.domain)
        interval = self._interval(count) or _DAY
        lo, hi = min(d0, d1), max(d0, d1)  # type: ignore[type-var]
        lo = math.floor(lo / interval) * interval
        hi = math.ceil(hi / interval) * interval
        if d0 > d1:  # type: ignore[operator]
            lo, hi = hi, lo
        return replace(self, domain=(self._from_number(lo), self._from_number(hi)))


@dataclass(frozen=True)
class SequentialScale(ContinuousScale):
    """
    Continuous domain mapped through an interpolator, e.g. a colour ramp.

    Attributes:
        interpolator (Callable[[float], Any] | None): Receives the normalized
            position t in [0, 1]. When None, t is mapped linearly onto the range.

    Examples:
        >>> scale = SequentialScale(domain=(0, 10), interpolator=lambda t: f"{t:.1f}")
        >>> scale(5), scale(20)
        ('0.5', '1.0')
    """

    clamp: bool = True
    interpolator: Callable[[float], Any] | None = None

    def __call__(self, value: Any) -> Any:
        if self.interpolator is None:
            return super().__call__(value)
        t = self.normalize(value)
        return None if t is None else self.interpolator(t)

    def with_interpolator(self, interpolator: Callable[[float], Any]) -> SequentialScale:
        return replace(self, interpolator=interpolator)
