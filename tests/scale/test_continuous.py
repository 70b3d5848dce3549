from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from pnut.core.values import to_epoch_ms
from pnut.scale.continuous import (
    LinearScale,
    LogScale,
    PowScale,
    SequentialScale,
    SqrtScale,
    TimeScale,
)


def test_linear_maps_and_inverts() -> None:
    scale = LinearScale(domain=(0, 10), range=(0, 100))
    assert scale(5) == pytest.approx(50)
    assert scale(20) == pytest.approx(200)
    assert scale(-5) == pytest.approx(-50)
    assert scale.invert(25) == pytest.approx(2.5)


def test_linear_reversed_range() -> None:
    scale = LinearScale(domain=(0, 10), range=(100, 0))
    assert scale(0) == pytest.approx(100)
    assert scale(10) == pytest.approx(0)


def test_linear_clamp() -> None:
    scale = LinearScale(domain=(0, 10), range=(0, 100)).with_clamp()
    assert scale(20) == pytest.approx(100)
    assert scale(-1) == pytest.approx(0)
    assert scale.invert(150) == pytest.approx(10)


def test_linear_degenerate_domain_maps_to_middle() -> None:
    assert LinearScale(domain=(5, 5), range=(0, 100))(5) == pytest.approx(50)


def test_unmappable_values_return_none() -> None:
    scale = LinearScale(domain=(0, 10), range=(0, 100))
    assert scale(None) is None
    assert scale("apple") is None
    assert scale.invert(None) is None


def test_linear_ticks_and_nice() -> None:
    scale = LinearScale(domain=(0, 10), range=(0, 1))
    assert scale.ticks(5) == [0, 2, 4, 6, 8, 10]
    assert LinearScale(domain=(3, 97)).nice(5).domain == (0, 100)


def test_numeric_scales_read_datetimes_as_epoch_ms() -> None:
    start, end = datetime(2020, 1, 1), datetime(2020, 1, 3)
    linear = LinearScale(domain=(start, end), range=(0, 100))
    assert linear(datetime(2020, 1, 2)) == pytest.approx(50)
    assert linear.invert(50) == pytest.approx(to_epoch_ms(datetime(2020, 1, 2)))
    d0, d1 = linear.nice(5).domain
    assert d0 <= to_epoch_ms(start) and d1 >= to_epoch_ms(end)
    assert linear.ticks(5)

    log = LogScale(domain=(start, end), range=(0, 1))
    assert log(start) == pytest.approx(0)
    assert log(end) == pytest.approx(1)
    assert log.ticks(5)
    assert log.nice().domain


def test_scales_are_immutable() -> None:
    scale = LinearScale(domain=(0, 1))
    moved = scale.with_domain((0, 2)).with_range((0, 10))
    assert scale.domain == (0, 1)
    assert moved.domain == (0, 2)
    assert moved.range == (0, 10)
    with pytest.raises(FrozenInstanceError):
        scale.domain = (1, 2)  # type: ignore[misc]


def test_scales_reject_bad_extents() -> None:
    with pytest.raises(ValueError):
        LinearScale(domain=(0, 1, 2))


def test_log_scale() -> None:
    scale = LogScale(domain=(1, 1000), range=(0, 3))
    assert scale(10) == pytest.approx(1)
    assert scale(100) == pytest.approx(2)
    assert scale.invert(2) == pytest.approx(100)
    assert scale(0) is None
    assert scale(-10) is None
    assert scale.ticks() == [1, 10, 100, 1000]


def test_log_scale_negative_domain() -> None:
    scale = LogScale(domain=(-1000, -1), range=(0, 3))
    assert scale(-100) == pytest.approx(1)
    assert scale(5) is None


def test_log_scale_nice_rounds_to_powers() -> None:
    scale = LogScale(domain=(3, 700)).nice()
    assert scale.domain == pytest.approx((1, 1000))


def test_log_scale_other_base() -> None:
    scale = LogScale(domain=(1, 8), range=(0, 3), base=2)
    assert scale(4) == pytest.approx(2)


def test_pow_and_sqrt_scales() -> None:
    square = PowScale(domain=(0, 10), range=(0, 100), exponent=2)
    assert square(5) == pytest.approx(25)
    assert square.invert(25) == pytest.approx(5)
    assert square.with_exponent(1)(5) == pytest.approx(50)

    root = SqrtScale(domain=(0, 100), range=(0, 10))
    assert root(25) == pytest.approx(5)
    assert root.exponent == 0.5


def test_time_scale_maps_datetimes() -> None:
    scale = TimeScale(domain=(datetime(2020, 1, 1), datetime(2020, 1, 11)), range=(0, 100))
    assert scale(datetime(2020, 1, 6)) == pytest.approx(50)
    assert scale.invert(50) == datetime(2020, 1, 6)
    assert scale(None) is None


def test_time_scale_reads_numbers_as_epoch_ms() -> None:
    scale = TimeScale(domain=(0, 86_400_000))
    assert scale.domain == (datetime(1970, 1, 1), datetime(1970, 1, 2))


def test_time_scale_daily_ticks() -> None:
    scale = TimeScale(domain=(datetime(2020, 1, 1), datetime(2020, 1, 11)))
    ticks = scale.ticks(10)
    assert ticks[0] == datetime(2020, 1, 1)
    assert ticks[-1] == datetime(2020, 1, 11)
    assert len(ticks) == 11


def test_time_scale_yearly_ticks() -> None:
    scale = TimeScale(domain=(datetime(2000, 6, 1), datetime(2030, 6, 1)))
    ticks = scale.ticks(5)
    assert all(t.month == 1 and t.day == 1 for t in ticks)
    assert ticks[0] == datetime(2005, 1, 1)


def test_time_scale_nice_extends_to_whole_days() -> None:
    scale = TimeScale(domain=(datetime(2020, 1, 1, 5), datetime(2020, 1, 10, 18))).nice(10)
    assert scale.domain == (datetime(2020, 1, 1), datetime(2020, 1, 11))


def test_time_scale_keeps_timezone() -> None:
    start = datetime(2020, 1, 1, tzinfo=timezone.utc)
    end = datetime(2020, 1, 2, tzinfo=timezone.utc)
    scale = TimeScale(domain=(start, end), range=(0, 24))
    assert scale.invert(12) == datetime(2020, 1, 1, 12, tzinfo=timezone.utc)


def test_sequential_scale() -> None:
    scale = SequentialScale(domain=(0, 10), range=(0, 1))
    assert scale.clamp is True
    assert scale(20) == pytest.approx(1)

    ramp = scale.with_interpolator(lambda t: "high" if t > 0.5 else "low")
    assert ramp(2) == "low"
    assert ramp(9) == "high"
    assert ramp(None) is None
