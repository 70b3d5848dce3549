"""
Structured diagnostics for recoverable data-shape and lookup errors.

Query-style operations on ChartData (unknown column, bad frame index, blend or
quantile argument out of range) return None instead of raising. Each of those
failures produces a Diagnostic which is logged through the ``pnut`` logger and
forwarded to an optional sink so callers and tests can inspect it without
capturing process-wide output.

Responsibilities
- Define the Diagnostic record and the codes emitted by the data container.
- Provide DiagnosticLog, a collecting sink.
- Provide report(), the single entry point used by the container and value helpers.

Examples:
    >>> from pnut.core.diagnostics import DiagnosticLog, report, COLUMN_NOT_FOUND
    >>> log = DiagnosticLog()
    >>> report(COLUMN_NOT_FOUND, 'column "x" not found.', sink=log)
    >>> [d.code for d in log.errors]
    ['column_not_found']
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticLog",
    "DiagnosticSink",
    "report",
    "COLUMN_NOT_FOUND",
    "INVALID_INDEX",
    "INVALID_BLEND",
    "INVALID_ARGUMENT",
    "INVALID_VALUES",
    "DUPLICATE_ROW",
]

logger = logging.getLogger(__name__)

Level = Literal["error", "warning"]

COLUMN_NOT_FOUND = "column_not_found"
INVALID_INDEX = "invalid_index"
INVALID_BLEND = "invalid_blend"
INVALID_ARGUMENT = "invalid_argument"
INVALID_VALUES = "invalid_values"
DUPLICATE_ROW = "duplicate_row"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single soft failure reported by the data container.

    Attributes:
        code (str): Machine-readable lower_snake code (e.g., "column_not_found").
        message (str): Human-readable description.
        level (Literal["error", "warning"]): Severity.
    """

    code: str
    message: str
    level: Level = "error"


DiagnosticSink = Callable[[Diagnostic], None]


@dataclass
class DiagnosticLog:
    """
    Collecting sink for diagnostics.

    Instances are callable and can be passed wherever a DiagnosticSink is expected.

    Examples:
        >>> from pnut.data import ChartData
        >>> log = DiagnosticLog()
        >>> ChartData([{"a": 1}], [{"key": "a"}], diagnostics=log).min("b") is None
        True
        >>> log.errors[0].code
        'column_not_found'
    """

    entries: list[Diagnostic] = field(default_factory=list)

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.entries.append(diagnostic)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.entries if d.level == "error"]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.entries if d.level == "warning"]

    def codes(self) -> list[str]:
        return [d.code for d in self.entries]

    def clear(self) -> None:
        self.entries.clear()


def report(
    code: str,
    message: str,
    *,
    level: Level = "error",
    sink: DiagnosticSink | None = None,
) -> None:
    """
    Log a diagnostic and forward it to the sink, if any.

    Args:
        code (str): Diagnostic code.
        message (str): Description; logged with a "ChartData: " prefix.
        level (Literal["error", "warning"]): Severity (default "error").
        sink (DiagnosticSink | None): Optional callable receiving the Diagnostic.
    """
    diagnostic = Diagnostic(code=code, message=message, level=level)
    if level == "warning":
        logger.warning("ChartData: %s", message)
    else:
        logger.error("ChartData: %s", message)
    if sink is not None:
        sink(diagnostic)
