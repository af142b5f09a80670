"""Columns of timezone-aware datetimes and the adapter that writes them as DateTime types."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Iterable, Optional

from .column_data import ColumnData, ColumnError, Encoder, SqlType, TypeKind
from .datetime64 import from_datetime

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_U32_MASK = 0xFFFF_FFFF


def _require_aware(value: Any) -> datetime:
    if not isinstance(value, datetime) or value.utcoffset() is None:
        raise ColumnError(f"expected a timezone-aware datetime, got {value!r}")
    return value


def _seconds(value: datetime) -> int:
    """Whole seconds since the epoch, wrapped to an unsigned 32-bit integer."""
    return ((value - _EPOCH) // timedelta(seconds=1)) & _U32_MASK


_AWARE = SqlType(TypeKind.AWARE_DATETIME)


class ChronoDateTimeColumnData(ColumnData):
    """Aware datetimes kept as given; the zone is taken from the first one."""

    def __init__(self, values: Iterable[datetime] = ()) -> None:
        self._data = [_require_aware(value) for value in values]
        self.tz: tzinfo = self._data[0].tzinfo if self._data else timezone.utc

    @property
    def values(self) -> tuple[datetime, ...]:
        return tuple(self._data)

    def sql_type(self) -> SqlType:
        return _AWARE

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        self._check_range(start, end)
        for value in self._data[start:end]:
            encoder.write("I", _seconds(value.astimezone(self.tz)))

    def __len__(self) -> int:
        return len(self._data)

    def push(self, value: datetime) -> None:
        self._data.append(_require_aware(value))

    def at(self, index: int) -> datetime:
        self._check_index(index)
        value = self._data[index]
        return (_EPOCH + timedelta(seconds=_seconds(value))).astimezone(value.tzinfo)

    def clone(self) -> "ChronoDateTimeColumnData":
        duplicate = type(self)(self._data)
        duplicate.tz = self.tz
        return duplicate

    def cast_to(self, target: SqlType) -> Optional[ColumnData]:
        if target.is_datetime():
            return ChronoDateTimeAdapter(self, target)
        return None


class ChronoDateTimeAdapter(ColumnData):
    """Writes an aware-datetime column as DateTime or DateTime64."""

    def __init__(self, column: ColumnData, dst_type: SqlType) -> None:
        self.column = column
        self.dst_type = dst_type

    def sql_type(self) -> SqlType:
        return self.dst_type

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        if not isinstance(self.column, ChronoDateTimeColumnData):
            raise ColumnError(f"Invalid column type {self.column.sql_type()}.")
        self.column._check_range(start, end)
        dates = self.column.values[start:end]
        kind = self.dst_type.kind
        if kind is TypeKind.DATETIME64:
            tz = self.dst_type.tz or timezone.utc
            for value in dates:
                encoder.write("q", from_datetime(value.astimezone(tz), self.dst_type.precision))
        elif kind is TypeKind.DATETIME:
            for value in dates:
                encoder.write("I", _seconds(value))
        else:
            raise ColumnError(f"cannot write datetimes as {self.dst_type}")

    def __len__(self) -> int:
        return len(self.column)

    def at(self, index: int) -> Any:
        return self.column.at(index)