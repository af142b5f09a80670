"""A read-only column formed by joining several columns of the same type."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .column_data import ColumnData, ColumnError, SqlType


def build_index(sizes: Iterable[int]) -> list[int]:
    """Cumulative offsets starting at 0, one more entry than there are sizes."""
    index = [0]
    for size in sizes:
        index.append(index[-1] + size)
    return index


def find_chunk(index: Sequence[int], ix: int) -> int:
    """Binary search for the chunk that holds row ix; 0 if none does."""
    lo = 0
    hi = len(index) - 1
    while lo < hi:
        mid = lo + (hi - lo) // 2
        if index[lo] == index[lo + 1]:
            lo += 1
            continue
        if ix < index[mid]:
            hi = mid
        elif ix >= index[mid + 1]:
            lo = mid + 1
        else:
            return mid
    return 0


class ConcatColumnData(ColumnData):
    """Several columns read as one."""

    def __init__(self, data: Sequence[ColumnData]) -> None:
        data = tuple(data)
        if not data:
            raise ColumnError("data should not be empty.")
        first = data[0].sql_type()
        for column in data[1:]:
            if column.sql_type() != first:
                raise ColumnError(
                    f"all columns should have the same type ({first} != {column.sql_type()})."
                )
        self._data = data
        self._index = build_index(len(column) for column in data)

    def sql_type(self) -> SqlType:
        return self._data[0].sql_type()

    def __len__(self) -> int:
        return self._index[-1]

    def at(self, index: int) -> Any:
        self._check_index(index)
        chunk = find_chunk(self._index, index)
        return self._data[chunk].at(index - self._index[chunk])

    def chunks(self) -> tuple[ColumnData, ...]:
        """The joined columns, in order."""
        return self._data