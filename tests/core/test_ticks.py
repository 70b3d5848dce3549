from __future__ import annotations

import pytest

from pnut.core.ticks import nice_domain, tick_increment, tick_step, ticks


def test_ticks_integer_steps() -> None:
    assert ticks(0, 10, 5) == [0, 2, 4, 6, 8, 10]
    assert ticks(0, 100, 10) == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


def test_ticks_fractional_steps_are_exact() -> None:
    assert ticks(0, 1, 10) == [0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0]


def test_ticks_reversed_domain_is_descending() -> None:
    assert ticks(10, 0, 5) == [10, 8, 6, 4, 2, 0]


def test_ticks_degenerate_domain() -> None:
    assert ticks(3, 3, 5) == [3]


def test_tick_increment_and_step() -> None:
    assert tick_increment(0, 10, 5) == 2
    # Fractional steps come back as negative reciprocals.
    assert tick_increment(0, 1, 10) == -10
    assert tick_step(0, 1, 10) == pytest.approx(0.1)
    assert tick_step(4, 99, 4) == 20
    assert tick_step(10, 0, 5) == -2


def test_nice_domain_extends_to_whole_steps() -> None:
    assert nice_domain(3, 97, 5) == (0, 100)
    assert nice_domain(0.12, 0.87, 10) == pytest.approx((0.1, 0.9))
    assert nice_domain(5, 5, 10) == (5, 5)
