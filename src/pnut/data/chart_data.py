"""
ChartData — the immutable tabular container consumed by the scale pipeline.

Responsibilities
- Own an ordered tuple of sanitized rows and an ordered tuple of Columns.
- Answer pooled aggregate queries (min/max/sum/average/median/quantile/variance/
  deviation/summary/extent) with per-instance memoization.
- Produce new containers for transformations: row mapping, frame extraction,
  fractional frame interpolation and histogram binning.

Failure policy
- Unknown columns, bad frame indexes and out-of-range blend/p arguments are
  reported through pnut.core.diagnostics and surface as None.
- Binning a non-continuous column raises BinError.
- Invalid raw values are silently normalized to None at construction.

Examples:
    >>> from pnut.data import ChartData
    >>> data = ChartData(
    ...     [{"supply": 12, "demand": 99}, {"supply": 32, "demand": 4}],
    ...     [{"key": "supply"}, {"key": "demand"}],
    ... )
    >>> data.min(["supply", "demand"]), data.max(["supply", "demand"]), data.sum("supply")
    (4, 99, 44)
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

import polars as pl

from pnut.core import values as V
from pnut.core.config import ChartSettings
from pnut.core.constants import LOWER_SUFFIX, UPPER_SUFFIX
from pnut.core.diagnostics import (
    COLUMN_NOT_FOUND,
    DUPLICATE_ROW,
    INVALID_ARGUMENT,
    INVALID_INDEX,
    INVALID_VALUES,
    DiagnosticSink,
    report,
)
from pnut.core.errors import BinError
from pnut.core.typing import ChartRow, ChartScalar, ColumnArg, RowDefinition

from .aggregate import Operation, aggregate, value_kind
from .bins import histogram
from .column import Column, ColumnDefinition, create_columns
from .thresholds import GENERATORS, count_thresholds

__all__ = ["ChartData", "ThresholdArg"]

_MISSING = object()

# Callable signature: (values, min, max, generators) -> count | thresholds
ThresholdArg = Callable[..., Any] | int | Sequence[Any] | None


def _freeze_row(row: Mapping[str, Any], sanitize: bool = True) -> ChartRow:
    if sanitize:
        return MappingProxyType({k: V.sanitize_value(v) for k, v in row.items()})
    return MappingProxyType(dict(row))


class ChartData:
    """
    Immutable rows plus column metadata, with memoized aggregate queries.

    Args:
        rows: Row mappings (column key -> raw value). Invalid values become None.
        columns: Column instances or mappings with key/label/is_continuous.
        diagnostics: Optional sink receiving soft-failure Diagnostics. Derived
            containers inherit it.
        settings: ChartSettings (defaults when None). Derived containers inherit it.

    Notes:
        Every transformation returns a new ChartData with a fresh memo cache; the
        cache is never shared between instances.
    """

    # Static value rules, also exposed on the container.
    is_value_valid = staticmethod(V.is_value_valid)
    is_value_continuous = staticmethod(V.is_value_continuous)
    is_value_date = staticmethod(V.is_value_date)
    interpolate = staticmethod(V.interpolate)
    interpolate_discrete = staticmethod(V.interpolate_discrete)

    __slots__ = ("_rows", "_columns", "_column_index", "_memos", "_sink", "_settings")

    def __init__(
        self,
        rows: Iterable[RowDefinition] = (),
        columns: Iterable[ColumnDefinition] = (),
        *,
        diagnostics: DiagnosticSink | None = None,
        settings: ChartSettings | None = None,
    ) -> None:
        self._init(
            tuple(_freeze_row(r) for r in rows),
            columns,
            diagnostics=diagnostics,
            settings=settings,
        )

    def _init(
        self,
        rows: tuple[ChartRow, ...],
        columns: Iterable[ColumnDefinition],
        *,
        diagnostics: DiagnosticSink | None,
        settings: ChartSettings | None,
    ) -> None:
        self._rows = rows
        self._columns = create_columns(columns, rows)
        self._column_index = {c.key: c for c in self._columns}
        self._memos: dict[str, Any] = {}
        self._sink = diagnostics
        self._settings = settings or ChartSettings()

    @classmethod
    def create(
        cls,
        rows: Iterable[RowDefinition] = (),
        columns: Iterable[ColumnDefinition] = (),
        **kwargs: Any,
    ) -> ChartData:
        """Alias of the constructor."""
        return cls(rows, columns, **kwargs)

    def _derive(
        self,
        rows: Iterable[Mapping[str, Any]] | None = None,
        columns: Iterable[ColumnDefinition] | None = None,
        *,
        sanitize: bool = True,
    ) -> ChartData:
        # New container sharing this one's sink and settings.
        out = object.__new__(type(self))
        frozen = self._rows if rows is None else tuple(_freeze_row(r, sanitize) for r in rows)
        out._init(
            frozen,
            self._columns if columns is None else columns,
            diagnostics=self._sink,
            settings=self._settings,
        )
        return out

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def rows(self) -> tuple[ChartRow, ...]:
        return self._rows

    @property
    def columns(self) -> tuple[Column, ...]:
        return self._columns

    @property
    def column_keys(self) -> tuple[str, ...]:
        return tuple(self._column_index)

    @property
    def settings(self) -> ChartSettings:
        return self._settings

    @property
    def diagnostics(self) -> DiagnosticSink | None:
        return self._sink

    def column(self, key: str) -> Column | None:
        return self._column_index.get(key)

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChartData):
            return NotImplemented
        return self._columns == other._columns and [dict(r) for r in self._rows] == [
            dict(r) for r in other._rows
        ]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        keys = ", ".join(self._column_index)
        return f"ChartData(rows={len(self._rows)}, columns=[{keys}])"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _report(self, code: str, message: str, level: str = "error") -> None:
        report(code, message, level=level, sink=self._sink)  # type: ignore[arg-type]

    def _column_error(self, column: str) -> bool:
        if column not in self._column_index:
            self._report(COLUMN_NOT_FOUND, f'column "{column}" not found.')
            return True
        return False

    def _column_list_error(self, columns: Sequence[str]) -> bool:
        # Report every missing column, not only the first.
        return any([self._column_error(c) for c in columns])

    def _index_error(self, index: Any, max_index: int | None = None, integer: bool = True) -> bool:
        if (
            isinstance(index, bool)
            or not isinstance(index, (int, float))
            or (isinstance(index, float) and not math.isfinite(index))
        ):
            self._report(INVALID_INDEX, f'index "{index}" must be a finite number.')
            return True
        if index < 0:
            self._report(INVALID_INDEX, f'index "{index}" must not be smaller than 0.')
            return True
        if max_index is not None and index > max_index:
            self._report(INVALID_INDEX, f'index "{index}" must not be larger than {max_index}.')
            return True
        if integer and round(index) != index:
            self._report(INVALID_INDEX, f'index "{index}" must not be decimal.')
            return True
        return False

    @staticmethod
    def _column_arg_list(columns: ColumnArg) -> tuple[str, ...]:
        if isinstance(columns, str):
            return (columns,)
        return tuple(columns)

    def _all_values_for_columns(self, columns: Sequence[str]) -> list[ChartScalar]:
        return [row.get(c) for row in self._rows for c in columns]

    def _memoize(self, key: str, fn: Callable[[], Any]) -> Any:
        if not self._settings.memoize:
            return fn()
        value = self._memos.get(key, _MISSING)
        if value is _MISSING:
            value = fn()
            self._memos[key] = value
        return value

    def _aggregation(self, operation: Operation, columns: ColumnArg, p: float | None = None) -> Any:
        column_list = self._column_arg_list(columns)
        if self._column_list_error(column_list):
            return None
        suffix = "" if p is None else f"[{p}]"
        key = f"{operation}{suffix}.{','.join(sorted(column_list))}"

        def compute() -> Any:
            pooled = [v for v in self._all_values_for_columns(column_list) if v is not None]
            try:
                result = aggregate(operation, pooled, p)
            except TypeError as exc:
                self._report(INVALID_VALUES, f"{exc} in {', '.join(column_list)}.")
                return None
            if isinstance(result, float) and math.isnan(result):
                return None
            return result

        return self._memoize(key, compute)

    # ------------------------------------------------------------------
    # Aggregations
    # ------------------------------------------------------------------

    def min(self, columns: ColumnArg) -> ChartScalar:
        """Minimum non-null value across the given column(s); None if there are none."""
        return self._aggregation("min", columns)

    def max(self, columns: ColumnArg) -> ChartScalar:
        """Maximum non-null value across the given column(s); None if there are none."""
        return self._aggregation("max", columns)

    def sum(self, columns: ColumnArg) -> ChartScalar:
        """Sum of non-null values; 0 when there are none."""
        return self._aggregation("sum", columns)

    def average(self, columns: ColumnArg) -> ChartScalar:
        return self._aggregation("average", columns)

    def median(self, columns: ColumnArg) -> ChartScalar:
        return self._aggregation("median", columns)

    def quantile(self, columns: ColumnArg, p: float) -> ChartScalar:
        """
        Linearly interpolated p-quantile of the pooled values.

        quantile(c, 0) == min(c), quantile(c, 0.5) == median(c), quantile(c, 1) == max(c).
        An unknown column or p outside [0, 1] reports a diagnostic and returns None.
        """
        if isinstance(p, bool) or not isinstance(p, (int, float)) or not 0 <= p <= 1:
            self._report(INVALID_ARGUMENT, f'p "{p}" must be from 0 to 1 inclusive.')
            return None
        return self._aggregation("quantile", columns, float(p))

    def variance(self, columns: ColumnArg) -> ChartScalar:
        """Population variance; None when there are no values."""
        return self._aggregation("variance", columns)

    def deviation(self, columns: ColumnArg) -> ChartScalar:
        """Population standard deviation (sqrt of variance)."""
        return self._aggregation("deviation", columns)

    def summary(self, columns: ColumnArg) -> dict[str, ChartScalar] | None:
        """
        Five-figure summary of the pooled values.

        Returns:
            dict with keys min, lowerQuartile, median, upperQuartile, max; or None
            when a column does not exist.
        """
        column_list = self._column_arg_list(columns)
        if self._column_list_error(column_list):
            return None
        return {
            "min": self.min(column_list),
            "lowerQuartile": self.quantile(column_list, 0.25),
            "median": self.median(column_list),
            "upperQuartile": self.quantile(column_list, 0.75),
            "max": self.max(column_list),
        }

    def extent(self, columns: ColumnArg) -> tuple[ChartScalar, ChartScalar]:
        """(min, max) pair; (None, None) when empty or a column does not exist."""
        return (self.min(columns), self.max(columns))

    # ------------------------------------------------------------------
    # Column queries
    # ------------------------------------------------------------------

    def get_column_data(self, column: str) -> tuple[ChartScalar, ...] | None:
        """All values of a column in row order (None cells included)."""
        if self._column_error(column):
            return None
        return self._memoize(
            f"getColumnData.{column}", lambda: tuple(row.get(column) for row in self._rows)
        )

    def get_unique_values(self, columns: ColumnArg) -> tuple[ChartScalar, ...] | None:
        """Distinct non-null pooled values in order of first appearance."""
        column_list = self._column_arg_list(columns)
        if self._column_list_error(column_list):
            return None
        return self._memoize(
            f"getUniqueValues.{','.join(column_list)}",
            lambda: tuple(
                dict.fromkeys(
                    v for v in self._all_values_for_columns(column_list) if v is not None
                )
            ),
        )

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def update_rows(
        self, updater: Callable[[tuple[ChartRow, ...]], Iterable[RowDefinition]]
    ) -> ChartData:
        """New container with rows replaced by updater(rows); columns retained."""
        return self._derive(rows=updater(self._rows))

    def update_columns(
        self, updater: Callable[[list[Column]], Iterable[ColumnDefinition]]
    ) -> ChartData:
        """New container with columns replaced by updater(columns); rows retained."""
        return self._derive(columns=list(updater(list(self._columns))))

    def map_rows(self, mapper: Callable[[ChartRow], RowDefinition]) -> ChartData:
        """New container with mapper applied to every row; columns retained."""
        return self._derive(rows=[mapper(row) for row in self._rows])

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def make_frames(self, column: str) -> tuple[tuple[ChartRow, ...], ...] | None:
        """
        Group rows by the distinct values of `column`, in first-seen order.

        Rows are expected to be sorted in the intended frame order already.
        """
        if self._column_error(column):
            return None

        def compute() -> tuple[tuple[ChartRow, ...], ...]:
            groups: dict[Any, list[ChartRow]] = {}
            for row in self._rows:
                groups.setdefault(row.get(column), []).append(row)
            return tuple(tuple(g) for g in groups.values())

        return self._memoize(f"makeFrames.{column}", compute)

    def frame_at_index(self, frame_column: str, index: int) -> ChartData | None:
        """Container holding only the rows of the index-th frame."""
        if self._column_error(frame_column) or self._index_error(index):
            return None

        def compute() -> ChartData | None:
            frames = self.make_frames(frame_column) or ()
            if self._index_error(index, len(frames) - 1):
                return None
            return self._derive(rows=frames[int(index)], sanitize=False)

        return self._memoize(f"frameAtIndex.{frame_column}[{int(index)}]", compute)

    def _row_from_frame(
        self,
        frame: Mapping[Any, list[ChartRow]],
        frame_column: str,
        primary_column: str,
        primary_value: Any,
    ) -> ChartRow | None:
        row_list = frame.get(primary_value)
        if not row_list:
            return None
        first = row_list[0]
        if len(row_list) > 1:
            self._report(
                DUPLICATE_ROW,
                f"Two data points found where {frame_column}={first.get(frame_column)} and "
                f"{primary_column}={primary_value}, using first data point.",
                level="warning",
            )
        return first

    def frame_at_index_interpolated(
        self, frame_column: str, primary_column: str, index: float
    ) -> ChartData | None:
        """
        Frame at a fractional index, blending the two surrounding frames.

        Args:
            frame_column (str): Column whose distinct values define the frames.
            primary_column (str): Column identifying the same data point across frames.
            index (float): Frame position; integers behave like frame_at_index().

        Returns:
            ChartData | None: Interpolated rows, one per primary value present in both
            surrounding frames (values missing from either frame are dropped). Continuous
            columns other than the primary column are interpolated; all others switch
            discretely at blend 0.5. None on invalid columns, index, or when
            frame_column == primary_column.
        """
        if (
            self._column_error(frame_column)
            or self._column_error(primary_column)
            or self._index_error(index, None, integer=False)
        ):
            return None

        if frame_column == primary_column:
            self._report(INVALID_ARGUMENT, "frameColumn and primaryColumn cannot be the same.")
            return None

        if round(index) == index:
            return self.frame_at_index(frame_column, int(index))

        frames = self.make_frames(frame_column) or ()
        if self._index_error(index, len(frames) - 1, integer=False):
            return None

        all_primary_values = self.get_unique_values(primary_column) or ()
        index_a = math.floor(index)
        index_b = math.ceil(index)
        blend = index - index_a

        def group(frame: Sequence[ChartRow]) -> dict[Any, list[ChartRow]]:
            out: dict[Any, list[ChartRow]] = {}
            for row in frame:
                out.setdefault(row.get(primary_column), []).append(row)
            return out

        frame_a = group(frames[index_a])
        frame_b = group(frames[index_b])

        rows: list[dict[str, ChartScalar]] = []
        for primary_value in all_primary_values:
            row_a = self._row_from_frame(frame_a, frame_column, primary_column, primary_value)
            row_b = self._row_from_frame(frame_b, frame_column, primary_column, primary_value)
            if row_a is None or row_b is None:
                continue
            row: dict[str, ChartScalar] = {}
            for column in self._columns:
                key = column.key
                if column.is_continuous and key != primary_column:
                    row[key] = V.interpolate(row_a.get(key), row_b.get(key), blend, sink=self._sink)
                else:
                    row[key] = V.interpolate_discrete(
                        row_a.get(key), row_b.get(key), blend, sink=self._sink
                    )
            rows.append(row)

        return self._derive(rows=rows)

    # ------------------------------------------------------------------
    # Binning
    # ------------------------------------------------------------------

    def bin(
        self,
        column: str,
        thresholds: ThresholdArg = None,
        domain: Sequence[Any] | None = None,
        row_mapper: Callable[[dict[str, Any]], Mapping[str, Any]] | None = None,
        column_updater: Callable[[list[Column]], Iterable[ColumnDefinition]] | None = None,
    ) -> ChartData | None:
        """
        Histogram the rows by a continuous column.

        Args:
            column (str): Continuous column to bin.
            thresholds: A callable ``(values, min, max, generators) -> count | thresholds``,
                a bin count, or explicit interior thresholds. Defaults to the
                ``settings.default_thresholds`` rule (Sturges).
            domain: Optional (min, max) covering the bins; defaults to the column extent.
            row_mapper: Optional post-processing of each bin row, whose cells are lists
                of the original values in that bin.
            column_updater: Optional final pass over the resulting column list.

        Returns:
            ChartData | None: One row per non-empty bin, ascending, with ``<column>Lower``
            and ``<column>Upper`` edges (datetimes for date columns). None if the
            column does not exist.

        Raises:
            BinError: If the column is not continuous.
        """
        if self._column_error(column):
            return None
        source = self._column_index[column]
        if not source.is_continuous:
            raise BinError(f'cannot bin non continuous column "{column}"')

        raw = [row.get(column) for row in self._rows]
        present = [v for v in raw if v is not None]
        kind = value_kind(present)
        if kind not in ("empty", "number", "date"):
            raise BinError(f'cannot bin column "{column}" containing non continuous values')
        is_date = kind == "date"
        like = present[0] if is_date else None

        def to_number(v: Any) -> float | None:
            if v is None:
                return None
            return V.to_epoch_ms(v) if V.is_value_date(v) else v

        def to_edge(v: float) -> ChartScalar:
            return V.from_epoch_ms(v, like=like) if is_date else v

        numbers = [to_number(v) for v in raw]
        pooled = [n for n in numbers if n is not None]

        lower_key = f"{column}{LOWER_SUFFIX}"
        upper_key = f"{column}{UPPER_SUFFIX}"
        new_columns: list[Column] = []
        for c in self._columns:
            if c.key == column:
                new_columns.append(c.model_copy(update={"key": lower_key}))
                new_columns.append(c.model_copy(update={"key": upper_key}))
            else:
                new_columns.append(c)
        final_columns: list[ColumnDefinition] = (
            list(column_updater(new_columns)) if column_updater else list(new_columns)
        )

        if not pooled:
            return self._derive(rows=[], columns=final_columns)

        if domain is not None:
            x0, x1 = (to_number(d) for d in domain)
        else:
            x0, x1 = min(pooled), max(pooled)

        if callable(thresholds):
            thresholds = thresholds(list(pooled), x0, x1, GENERATORS)
        if thresholds is None:
            rule = GENERATORS.get(self._settings.default_thresholds)
            thresholds = rule(pooled, x0, x1)
        # A bare number (int or float) is a bin count.
        if isinstance(thresholds, (int, float)) and not isinstance(thresholds, bool):
            edges = count_thresholds(x0, x1, thresholds)
        else:
            edges = [to_number(t) for t in thresholds]

        bins = [b for b in histogram(numbers, (x0, x1), edges) if b.indices]

        rows: list[Mapping[str, Any]] = []
        for b in bins:
            members = [self._rows[i] for i in b.indices]
            row: dict[str, Any] = {c.key: [m.get(c.key) for m in members] for c in self._columns}
            mapped: dict[str, Any] = dict(row_mapper(row)) if row_mapper else row
            mapped.pop(column, None)
            mapped[lower_key] = to_edge(b.lower)
            mapped[upper_key] = to_edge(b.upper)
            rows.append(mapped)

        return self._derive(rows=rows, columns=final_columns, sanitize=False)

    # ------------------------------------------------------------------
    # Polars interop
    # ------------------------------------------------------------------

    @classmethod
    def from_frame(
        cls,
        df: pl.DataFrame,
        columns: Iterable[ColumnDefinition] | None = None,
        **kwargs: Any,
    ) -> ChartData:
        """
        Build a ChartData from a Polars DataFrame.

        When `columns` is None, one column per frame column is created, continuous
        for numeric and temporal dtypes.
        """
        if columns is None:
            columns = [
                Column(key=name, is_continuous=dtype.is_numeric() or dtype.is_temporal())
                for name, dtype in df.schema.items()
            ]
        return cls(df.to_dicts(), columns, **kwargs)

    def to_frame(self) -> pl.DataFrame:
        """Rows as a Polars DataFrame with one column per Column, in column order."""
        keys = [c.key for c in self._columns]
        return pl.from_dicts(
            [{k: row.get(k) for k in keys} for row in self._rows],
            schema=keys,
            infer_schema_length=None,
            strict=False,
        )
