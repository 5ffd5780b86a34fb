# daygrid/packer.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .model import ColumnSpan, TimeRange


@dataclass
class PackResult:
    spans: List[ColumnSpan] = field(default_factory=list)
    column_count: int = 0


def _column_is_free(
    column: int,
    position: int,
    ranges: Sequence[TimeRange],
    spans: Sequence[ColumnSpan],
) -> bool:
    # Only spans assigned so far are consulted; a span "occupies" the column it starts in.
    rng = ranges[position]
    for i, span in enumerate(spans):
        if i == position:
            continue
        if span.start_column == column and ranges[i].conflicts(rng):
            return False
    return True


def _assign_start_column(position: int, ranges: Sequence[TimeRange], result: PackResult) -> None:
    # There are never more columns than ranges, so the loop always finds one.
    for column in range(len(ranges)):
        if _column_is_free(column, position, ranges, result.spans):
            result.spans.append(ColumnSpan(start_column=column, end_column=column + 1))
            result.column_count = max(result.column_count, column + 1)
            return


def _extend_end_column(position: int, ranges: Sequence[TimeRange], result: PackResult) -> None:
    span = result.spans[position]
    for column in range(span.end_column, result.column_count):
        if not _column_is_free(column, position, ranges, result.spans):
            break
        span.end_column += 1


def pack_columns(ranges: Sequence[TimeRange]) -> PackResult:
    """
    Assign each range a [start_column, end_column) span.

    Two passes, both in input order:
      1) greedy coloring: each range takes the lowest column where no earlier
         conflicting range starts;
      2) widening: each span grows rightward while the next column holds no
         conflicting range that starts there.

    The result is deterministic for a fixed input order; conflicting ranges never
    share a column.
    """
    ranges = list(ranges)
    result = PackResult(spans=[], column_count=0)

    for i in range(len(ranges)):
        _assign_start_column(i, ranges, result)
    for i in range(len(ranges)):
        _extend_end_column(i, ranges, result)

    return result


def spans_overlap(a: ColumnSpan, b: ColumnSpan) -> bool:
    return a.start_column < b.end_column and b.start_column < a.end_column


__all__ = [
    "PackResult",
    "pack_columns",
    "spans_overlap",
]
