"""Enum8 and Enum16 columns and the adapters that rename their items."""

from __future__ import annotations

import copy
from typing import Any, Iterable, Optional, Sequence

from .column_data import ColumnData, ColumnError, Encoder, Reader, SqlType, TypeKind
from .typed_list import TypedList

_KINDS = {8: TypeKind.ENUM8, 16: TypeKind.ENUM16}
_FORMATS = {TypeKind.ENUM8: "b", TypeKind.ENUM16: "h"}


def _kind_of_width(width: int) -> TypeKind:
    kind = _KINDS.get(width)
    if kind is None:
        raise ColumnError(f"enum width must be 8 or 16, got {width!r}")
    return kind


def _enum_type(kind: TypeKind, enum_values: Sequence[tuple[str, int]]) -> SqlType:
    return SqlType(kind, enum_values=tuple(enum_values))


def _enum_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ColumnError(f"should be Enum ({value!r})")
    return value


class EnumColumnData(ColumnData):
    """A column of enum values stored as 8- or 16-bit signed integers."""

    def __init__(
        self,
        width: int,
        enum_values: Sequence[tuple[str, int]] = (),
        values: Iterable[int] = (),
    ) -> None:
        self.kind = _kind_of_width(width)
        self.width = width
        self.enum_values = tuple((str(name), int(code)) for name, code in enum_values)
        self._data = TypedList(_FORMATS[self.kind], values)

    @classmethod
    def load(
        cls,
        reader: Reader,
        width: int,
        enum_values: Sequence[tuple[str, int]],
        size: int,
    ) -> "EnumColumnData":
        column = cls(width, enum_values)
        column._data = TypedList.from_bytes(
            column._data.fmt, reader.read_bytes(size * column._data.itemsize)
        )
        return column

    def sql_type(self) -> SqlType:
        return _enum_type(self.kind, self.enum_values)

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        self._check_range(start, end)
        for value in self._data[start:end]:
            encoder.write(self._data.fmt, value)

    def __len__(self) -> int:
        return len(self._data)

    def push(self, value: Any) -> None:
        """Append an item, given by its integer value or by its name."""
        if isinstance(value, str):
            codes = dict(self.enum_values)
            if value not in codes:
                raise ColumnError(f"unknown enum item {value!r}")
            value = codes[value]
        self._data.push(_enum_int(value))

    def at(self, index: int) -> int:
        return self._data.at(index)

    def clone(self) -> "EnumColumnData":
        duplicate = type(self)(self.width, self.enum_values)
        duplicate._data = copy.copy(self._data)
        return duplicate


class EnumAdapter(ColumnData):
    """Presents an enum column under another list of items."""

    def __init__(self, column: Any, enum_values: Sequence[tuple[str, int]]) -> None:
        kind = column.sql_type().kind
        if kind not in _FORMATS:
            raise ColumnError(f"Invalid column type {column.sql_type()}.")
        self.column = column
        self.kind = kind
        self.enum_values = tuple((str(name), int(code)) for name, code in enum_values)

    def sql_type(self) -> SqlType:
        return _enum_type(self.kind, self.enum_values)

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        fmt = _FORMATS[self.kind]
        for index in range(start, end):
            encoder.write(fmt, self.at(index))

    def __len__(self) -> int:
        return len(self.column)

    def at(self, index: int) -> int:
        return _enum_int(self.column.at(index))


class NullableEnumAdapter(ColumnData):
    """Presents a Nullable(Enum) column under another list of items."""

    def __init__(self, column: Any, enum_values: Sequence[tuple[str, int]]) -> None:
        source = column.sql_type()
        if source.kind is not TypeKind.NULLABLE or source.inner.kind not in _FORMATS:
            raise ColumnError(f"Invalid column type {source}.")
        self.column = column
        self.kind = source.inner.kind
        self.enum_values = tuple((str(name), int(code)) for name, code in enum_values)

    def sql_type(self) -> SqlType:
        return SqlType(TypeKind.NULLABLE, inner=_enum_type(self.kind, self.enum_values))

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        values = [self.at(index) for index in range(start, end)]
        encoder.write_bytes(bytes(1 if value is None else 0 for value in values))
        fmt = _FORMATS[self.kind]
        for value in values:
            encoder.write(fmt, 0 if value is None else value)

    def __len__(self) -> int:
        return len(self.column)

    def at(self, index: int) -> Optional[int]:
        value = self.column.at(index)
        return None if value is None else _enum_int(value)