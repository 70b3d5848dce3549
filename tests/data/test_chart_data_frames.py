from __future__ import annotations

import math

import pytest

from pnut.core.diagnostics import (
    COLUMN_NOT_FOUND,
    DUPLICATE_ROW,
    INVALID_ARGUMENT,
    INVALID_INDEX,
    DiagnosticLog,
)
from pnut.data import ChartData

COLUMNS = [
    {"key": "day", "label": "Day"},
    {"key": "fruit", "label": "Fruit"},
    {"key": "amount", "label": "Amount"},
    {"key": "color", "label": "Color"},
]

# Day 3 has no banana on purpose.
FRAMEABLE_ROWS = [
    {"day": 1, "fruit": "apple", "amount": 3, "color": "blue"},
    {"day": 1, "fruit": "banana", "amount": 4, "color": "blue"},
    {"day": 1, "fruit": "fudge", "amount": 5, "color": "blue"},
    {"day": 2, "fruit": "apple", "amount": 2, "color": "green"},
    {"day": 2, "fruit": "banana", "amount": 5, "color": "green"},
    {"day": 2, "fruit": "fudge", "amount": 5, "color": "green"},
    {"day": 3, "fruit": "apple", "amount": 0, "color": "yellow"},
    {"day": 3, "fruit": "fudge", "amount": 100, "color": "yellow"},
]


def _plain(rows) -> list[dict]:
    return [dict(r) for r in rows]


def _by_day(day: int) -> list[dict]:
    return [r for r in FRAMEABLE_ROWS if r["day"] == day]


@pytest.fixture
def data() -> ChartData:
    return ChartData(FRAMEABLE_ROWS, COLUMNS)


def test_make_frames_groups_rows_by_column(data: ChartData) -> None:
    frames = data.make_frames("day")
    assert [_plain(f) for f in frames] == [_by_day(1), _by_day(2), _by_day(3)]


def test_make_frames_keeps_first_seen_order() -> None:
    rows = [{"k": "b", "v": 1}, {"k": "a", "v": 2}, {"k": "b", "v": 3}]
    frames = ChartData(rows, [{"key": "k"}, {"key": "v"}]).make_frames("k")
    assert [[r["v"] for r in f] for f in frames] == [[1, 3], [2]]


def test_make_frames_unknown_column(data: ChartData) -> None:
    assert data.make_frames("not here") is None


def test_make_frames_is_memoized_per_column(data: ChartData) -> None:
    assert data.make_frames("fruit") is data.make_frames("fruit")
    data.make_frames("amount")
    assert [_plain(f) for f in data.make_frames("day")] == [_by_day(1), _by_day(2), _by_day(3)]


def test_frame_at_index(data: ChartData) -> None:
    frame = data.frame_at_index("day", 1)
    assert isinstance(frame, ChartData)
    assert _plain(frame.rows) == _by_day(2)
    assert frame.columns == data.columns


@pytest.mark.parametrize("index", [-1, 3, 2.3, math.inf, -math.inf, math.nan])
def test_frame_at_index_rejects_bad_indexes(index) -> None:
    log = DiagnosticLog()
    data = ChartData(FRAMEABLE_ROWS, COLUMNS, diagnostics=log)
    assert data.frame_at_index("day", index) is None
    assert log.codes() == [INVALID_INDEX]


def test_frame_at_index_unknown_column(data: ChartData) -> None:
    assert data.frame_at_index("not here", 0) is None


def test_frame_at_index_is_memoized_per_column_and_index(data: ChartData) -> None:
    assert data.frame_at_index("fruit", 0) is data.frame_at_index("fruit", 0)
    data.frame_at_index("amount", 0)
    data.frame_at_index("day", 1)
    assert _plain(data.frame_at_index("day", 0).rows) == _by_day(1)


def test_interpolated_frame_at_integer_index(data: ChartData) -> None:
    frame = data.frame_at_index_interpolated("day", "fruit", 1)
    assert _plain(frame.rows) == _by_day(2)


def test_interpolated_frame_lerps_numbers_and_switches_strings(data: ChartData) -> None:
    rows = data.frame_at_index_interpolated("day", "fruit", 0.4).rows
    assert [r["fruit"] for r in rows] == ["apple", "banana", "fudge"]
    assert [r["day"] for r in rows] == pytest.approx([1.4, 1.4, 1.4])
    assert [r["amount"] for r in rows] == pytest.approx([2.6, 4.4, 5])
    assert [r["color"] for r in rows] == ["blue", "blue", "blue"]

    rows = data.frame_at_index_interpolated("day", "fruit", 0.5).rows
    assert [r["day"] for r in rows] == pytest.approx([1.5, 1.5, 1.5])
    assert [r["amount"] for r in rows] == pytest.approx([2.5, 4.5, 5])
    assert [r["color"] for r in rows] == ["green", "green", "green"]


def test_interpolated_frame_drops_missing_data_points(data: ChartData) -> None:
    rows = data.frame_at_index_interpolated("day", "fruit", 1.5).rows
    assert [r["fruit"] for r in rows] == ["apple", "fudge"]
    assert [r["day"] for r in rows] == pytest.approx([2.5, 2.5])
    assert [r["amount"] for r in rows] == pytest.approx([1, 52.5])
    assert [r["color"] for r in rows] == ["yellow", "yellow"]


def test_interpolated_frame_uses_first_of_duplicate_points() -> None:
    log = DiagnosticLog()
    rows = FRAMEABLE_ROWS + [{"day": 3, "fruit": "fudge", "amount": -999, "color": "crimson"}]
    data = ChartData(rows, COLUMNS, diagnostics=log)

    out = data.frame_at_index_interpolated("day", "fruit", 1.5).rows

    assert [r["fruit"] for r in out] == ["apple", "fudge"]
    assert [r["amount"] for r in out] == pytest.approx([1, 52.5])
    assert [r["color"] for r in out] == ["yellow", "yellow"]
    assert DUPLICATE_ROW in log.codes()
    assert all(d.level == "warning" for d in log.warnings)


@pytest.mark.parametrize("index", [-1, 3, 2.3, math.inf, -math.inf, math.nan])
def test_interpolated_frame_rejects_bad_indexes(data: ChartData, index) -> None:
    assert data.frame_at_index_interpolated("day", "fruit", index) is None


def test_interpolated_frame_rejects_bad_columns() -> None:
    log = DiagnosticLog()
    data = ChartData(FRAMEABLE_ROWS, COLUMNS, diagnostics=log)
    assert data.frame_at_index_interpolated("not here", "fruit", 0) is None
    assert data.frame_at_index_interpolated("day", "not here", 0) is None
    assert data.frame_at_index_interpolated("day", "day", 0) is None
    assert log.codes() == [COLUMN_NOT_FOUND, COLUMN_NOT_FOUND, INVALID_ARGUMENT]
