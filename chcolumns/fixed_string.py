"""FixedString columns and the adapters that write other columns as FixedString."""

from __future__ import annotations

from typing import Any, Optional

from .column_data import ColumnData, ColumnError, Encoder, Reader, SqlType, TypeKind


def _string_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise ColumnError(f"expected a string, got {value!r}")


def _fit(data: bytes, length: int) -> bytes:
    return data[:length].ljust(length, b"\0")


class FixedStringColumnData(ColumnData):
    """Strings of exactly str_len bytes, zero-padded."""

    def __init__(self, str_len: int, buffer: bytes = b"") -> None:
        if str_len <= 0:
            raise ColumnError(f"FixedString length must be positive: {str_len}")
        if len(buffer) % str_len:
            raise ColumnError(f"buffer is not a whole number of {str_len}-byte strings")
        self.str_len = str_len
        self._buffer = bytearray(buffer)

    @classmethod
    def load(cls, reader: Reader, size: int, str_len: int) -> "FixedStringColumnData":
        return cls(str_len, reader.read_bytes(size * str_len))

    def sql_type(self) -> SqlType:
        return SqlType(TypeKind.FIXED_STRING, length=self.str_len)

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        self._check_range(start, end)
        encoder.write_bytes(bytes(self._buffer[start * self.str_len:end * self.str_len]))

    def __len__(self) -> int:
        return len(self._buffer) // self.str_len

    def push(self, value: Any) -> None:
        self._buffer += _fit(_string_bytes(value), self.str_len)

    def at(self, index: int) -> bytes:
        self._check_index(index)
        shift = index * self.str_len
        return bytes(self._buffer[shift:shift + self.str_len])

    def clone(self) -> "FixedStringColumnData":
        return type(self)(self.str_len, self._buffer)


class FixedStringAdapter(ColumnData):
    """Writes a String or Array(UInt8) column as FixedString(str_len)."""

    def __init__(self, column: Any, str_len: int) -> None:
        self.column = column
        self.str_len = str_len

    def sql_type(self) -> SqlType:
        return SqlType(TypeKind.FIXED_STRING, length=self.str_len)

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        for index in range(start, end):
            value = self.column.at(index)
            if isinstance(value, (list, tuple)):
                try:
                    data = bytes(value)
                except (TypeError, ValueError) as exc:
                    raise ColumnError(f"array is not a list of bytes: {value!r}") from exc
            else:
                data = _string_bytes(value)
            encoder.write_bytes(_fit(data, self.str_len))

    def __len__(self) -> int:
        return len(self.column)

    def at(self, index: int) -> Any:
        return self.column.at(index)


class NullableFixedStringAdapter(ColumnData):
    """Writes a Nullable(String) column as Nullable(FixedString(str_len))."""

    def __init__(self, column: Any, str_len: int) -> None:
        self.column = column
        self.str_len = str_len

    def sql_type(self) -> SqlType:
        return SqlType(
            TypeKind.NULLABLE, inner=SqlType(TypeKind.FIXED_STRING, length=self.str_len)
        )

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        values: list[Optional[bytes]] = [
            None if value is None else _string_bytes(value)
            for value in (self.at(index) for index in range(start, end))
        ]
        encoder.write_bytes(bytes(1 if value is None else 0 for value in values))
        for value in values:
            encoder.write_bytes(_fit(value or b"", self.str_len))

    def __len__(self) -> int:
        return len(self.column)

    def at(self, index: int) -> Any:
        return self.column.at(index)