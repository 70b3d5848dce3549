from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from pnut.data.column import Column, create_columns, infer_continuous


def test_column_defaults_label_to_key() -> None:
    assert Column(key="day").label == "day"
    assert Column.model_validate({"key": "day", "label": ""}).label == "day"
    assert Column.model_validate({"key": "day", "label": "Day"}).label == "Day"


def test_column_accepts_camel_case_continuity() -> None:
    assert Column.model_validate({"key": "a", "isContinuous": True}).is_continuous is True
    assert Column.model_validate({"key": "a", "is_continuous": False}).is_continuous is False


def test_column_is_frozen() -> None:
    col = Column(key="a")
    with pytest.raises(ValidationError):
        col.key = "b"  # type: ignore[misc]


def test_column_rejects_empty_key() -> None:
    with pytest.raises(ValidationError):
        Column(key="")


def test_infer_continuous_uses_first_non_null_value() -> None:
    rows = [{"a": None, "b": "x"}, {"a": 1.5, "b": 2}, {"a": "late", "c": datetime(2020, 1, 1)}]
    assert infer_continuous("a", rows) is True
    assert infer_continuous("b", rows) is False
    assert infer_continuous("c", rows) is True
    assert infer_continuous("missing", rows) is False


def test_create_columns_keeps_order_and_explicit_flags() -> None:
    cols = create_columns(
        [Column(key="b", is_continuous=False), {"key": "a"}],
        [{"a": 1, "b": 2}],
    )
    assert [(c.key, c.is_continuous) for c in cols] == [("b", False), ("a", True)]


def test_create_columns_rejects_duplicate_keys() -> None:
    with pytest.raises(ValueError, match="duplicate"):
        create_columns([{"key": "a"}, Column(key="a")], [])
