"""DateTime64 columns: signed 64-bit ticks at a decimal precision."""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable

from .column_data import ColumnData, ColumnError, Encoder, Reader, SqlType, TypeKind
from .typed_list import TypedList

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS = 1_000_000_000
_MAX_PRECISION = 9


def _divisor(precision: int) -> int:
    if not 0 <= precision <= _MAX_PRECISION:
        raise ColumnError(f"unsupported DateTime64 precision {precision}")
    return 10 ** (_MAX_PRECISION - precision)


def from_datetime(time: datetime, precision: int) -> int:
    """Ticks since the epoch at the given precision, truncated toward zero."""
    if time.tzinfo is None or time.utcoffset() is None:
        raise ColumnError("datetime must be timezone-aware")
    delta = time - _EPOCH
    nanos = (delta.days * 86400 + delta.seconds) * _NANOS + delta.microseconds * 1000
    quotient = abs(nanos) // _divisor(precision)
    return quotient if nanos >= 0 else -quotient


def to_datetime(value: int, precision: int, tz: tzinfo) -> datetime:
    """The moment that value ticks at the given precision denote, in tz."""
    nanos = value * _divisor(precision) if precision < 19 else 0
    seconds, rest = divmod(nanos, _NANOS)
    try:
        moment = _EPOCH + timedelta(seconds=seconds, microseconds=rest // 1000)
        return moment.astimezone(tz)
    except OverflowError as exc:
        raise ColumnError(f"timestamp {value} is out of range") from exc


class DateTime64ColumnData(ColumnData):
    """A column of DateTime64 ticks with a fixed precision and time zone."""

    def __init__(self, precision: int, tz: tzinfo, values: Iterable[int] = ()) -> None:
        _divisor(precision)
        self.precision = precision
        self.tz = tz
        self._data = TypedList("q", values)

    @classmethod
    def load(
        cls, reader: Reader, size: int, precision: int, tz: tzinfo
    ) -> "DateTime64ColumnData":
        column = cls(precision, tz)
        column._data = TypedList.from_bytes("q", reader.read_bytes(size * 8))
        return column

    def sql_type(self) -> SqlType:
        return SqlType(TypeKind.DATETIME64, precision=self.precision, tz=self.tz)

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        self._check_range(start, end)
        for stamp in self._data[start:end]:
            encoder.write("q", stamp)

    def __len__(self) -> int:
        return len(self._data)

    def push(self, value: datetime) -> None:
        if not isinstance(value, datetime):
            raise ColumnError(f"expected a datetime, got {value!r}")
        self._data.push(from_datetime(value, self.precision))

    def at(self, index: int) -> datetime:
        return to_datetime(self._data.at(index), self.precision, self.tz)

    def clone(self) -> "DateTime64ColumnData":
        duplicate = type(self)(self.precision, self.tz)
        duplicate._data = copy.copy(self._data)
        return duplicate