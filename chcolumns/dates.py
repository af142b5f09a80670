"""Date and DateTime columns stored as unsigned day or second counts."""

from __future__ import annotations

import copy
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Iterable, Union

from .column_data import ColumnData, ColumnError, Encoder, Reader, SqlType, TypeKind
from .typed_list import TypedList

_EPOCH_DATE = date(1970, 1, 1)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_FORMATS = {TypeKind.DATE: "H", TypeKind.DATETIME: "I"}


class DateColumnData(ColumnData):
    """Dates as 16-bit days, or date-times as 32-bit seconds, since the epoch."""

    def __init__(self, kind: TypeKind, tz: tzinfo = timezone.utc, stamps: Iterable[int] = ()) -> None:
        fmt = _FORMATS.get(kind)
        if fmt is None:
            raise ColumnError(f"not a date column kind: {kind}")
        self.kind = kind
        self.tz = tz
        self._data = TypedList(fmt, stamps)

    @classmethod
    def load(cls, reader: Reader, kind: TypeKind, size: int, tz: tzinfo) -> "DateColumnData":
        column = cls(kind, tz)
        column._data = TypedList.from_bytes(
            column._data.fmt, reader.read_bytes(size * column._data.itemsize)
        )
        return column

    @classmethod
    def from_dates(cls, dates: Iterable[date]) -> "DateColumnData":
        """A Date column in UTC holding the given dates."""
        column = cls(TypeKind.DATE, timezone.utc)
        for value in dates:
            column.push(value)
        return column

    def sql_type(self) -> SqlType:
        return SqlType(self.kind)

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        self._check_range(start, end)
        for stamp in self._data[start:end]:
            encoder.write(self._data.fmt, stamp)

    def __len__(self) -> int:
        return len(self._data)

    def _stamp(self, value: Any) -> int:
        if self.kind is TypeKind.DATE:
            if isinstance(value, datetime) or not isinstance(value, date):
                raise ColumnError(f"expected a date, got {value!r}")
            return value.toordinal() - _EPOCH_DATE.toordinal()
        if not isinstance(value, datetime) or value.utcoffset() is None:
            raise ColumnError(f"expected a timezone-aware datetime, got {value!r}")
        return (value - _EPOCH) // timedelta(seconds=1)

    def push(self, value: Any) -> None:
        self._data.push(self._stamp(value))

    def at(self, index: int) -> Union[date, datetime]:
        stamp = self._data.at(index)
        if self.kind is TypeKind.DATE:
            return _EPOCH_DATE + timedelta(days=stamp)
        return (_EPOCH + timedelta(seconds=stamp)).astimezone(self.tz)

    def clone(self) -> "DateColumnData":
        duplicate = type(self)(self.kind, self.tz)
        duplicate._data = copy.copy(self._data)
        return duplicate