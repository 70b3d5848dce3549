"""
Column descriptors for ChartData.

A Column is a frozen Pydantic v2 model. Definitions may be supplied as Column
instances or plain mappings; missing `is_continuous` flags are inferred from the
first non-null value of the column.

Examples:
    >>> from pnut.data.column import Column, create_columns
    >>> cols = create_columns([{"key": "day"}, {"key": "fruit", "label": "Fruit"}],
    ...                       [{"day": 1, "fruit": "apple"}])
    >>> [(c.key, c.label, c.is_continuous) for c in cols]
    [('day', 'day', True), ('fruit', 'Fruit', False)]
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from pnut.core.typing import ChartRow
from pnut.core.values import is_value_continuous

__all__ = ["Column", "ColumnDefinition", "create_columns", "infer_continuous"]


class Column(BaseModel):
    """
    Descriptor for one column of a ChartData.

    Attributes:
        key (str): Unique column identifier used as the row mapping key.
        label (str): Display label; defaults to the key.
        is_continuous (bool | None): True when values have intrinsic order (numbers,
            datetimes). None only on definitions that still need inference; columns
            attached to a ChartData always carry a bool.

    Notes:
        Accepts "isContinuous" as an alias for is_continuous so column definitions
        written for JavaScript charting libraries validate unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(..., min_length=1)
    label: str = ""
    is_continuous: bool | None = Field(
        default=None, validation_alias=AliasChoices("is_continuous", "isContinuous")
    )

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("label"):
            return {**data, "label": data.get("key", "")}
        return data


ColumnDefinition = Column | Mapping[str, Any]


def infer_continuous(key: str, rows: Sequence[ChartRow]) -> bool:
    """Classify a column from its first non-null value; all-null columns are categorical."""
    for row in rows:
        value = row.get(key)
        if value is not None:
            return is_value_continuous(value)
    return False


def create_columns(
    columns: Iterable[ColumnDefinition], rows: Sequence[ChartRow]
) -> tuple[Column, ...]:
    """
    Validate column definitions and resolve missing continuity flags.

    Args:
        columns: Column instances or mappings with key/label/is_continuous.
        rows: Sanitized rows used for continuity inference.

    Returns:
        tuple[Column, ...]: Columns in definition order, each with a bool is_continuous.

    Raises:
        pydantic.ValidationError: If a definition is malformed (e.g., missing key).
        ValueError: If two definitions share a key.
    """
    out: list[Column] = []
    seen: set[str] = set()
    for definition in columns:
        col = definition if isinstance(definition, Column) else Column.model_validate(definition)
        if col.key in seen:
            raise ValueError(f"duplicate column key {col.key!r}")
        seen.add(col.key)
        if col.is_continuous is None:
            col = col.model_copy(update={"is_continuous": infer_continuous(col.key, rows)})
        out.append(col)
    return tuple(out)
