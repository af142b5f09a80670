"""A read-only window onto a range of another column."""

from __future__ import annotations

from typing import Any

from .column_data import ColumnData, Encoder, SqlType


class ChunkColumnData(ColumnData):
    """Rows [start, end) of an underlying column."""

    def __init__(self, data: ColumnData, start: int, end: int) -> None:
        self._data = data
        self._start = start
        self._end = end

    def sql_type(self) -> SqlType:
        return self._data.sql_type()

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        self._data.save(encoder, self._start + start, min(self._end, self._start + end))

    def __len__(self) -> int:
        return max(0, self._end - self._start)

    def at(self, index: int) -> Any:
        if not 0 <= index < len(self):
            raise IndexError("out of range")
        return self._data.at(index + self._start)