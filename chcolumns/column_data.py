"""SQL types, the binary encoder and reader, and the column protocol."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from typing import Any, Iterator, Optional


class ColumnError(Exception):
    """Raised when column data cannot be built, read, converted or written."""


class TypeKind(Enum):
    """The kinds of SQL column types."""

    UINT8 = "UInt8"
    UINT16 = "UInt16"
    UINT32 = "UInt32"
    UINT64 = "UInt64"
    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    STRING = "String"
    FIXED_STRING = "FixedString"
    DATE = "Date"
    DATETIME = "DateTime"
    DATETIME64 = "DateTime64"
    AWARE_DATETIME = "DateTime (aware)"
    IPV4 = "IPv4"
    IPV6 = "IPv6"
    UUID = "UUID"
    NULLABLE = "Nullable"
    ARRAY = "Array"
    DECIMAL = "Decimal"
    ENUM8 = "Enum8"
    ENUM16 = "Enum16"
    TUPLE = "Tuple"


class NoBits(Enum):
    """Width of the integer that stores a decimal value."""

    N32 = 32
    N64 = 64

    @property
    def fmt(self) -> str:
        """The struct format character of the storage integer."""
        return "i" if self is NoBits.N32 else "q"

    @classmethod
    def from_precision(cls, precision: int) -> Optional["NoBits"]:
        """Pick the storage width for a decimal precision, or None if unsupported."""
        if 1 <= precision <= 9:
            return cls.N32
        if 10 <= precision <= 18:
            return cls.N64
        return None


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _tz_name(tz: tzinfo) -> str:
    key = getattr(tz, "key", None)
    if key:
        return key
    return tz.tzname(None) or str(tz)


@dataclass(frozen=True)
class SqlType:
    """A column type; which fields matter depends on ``kind``."""

    kind: TypeKind
    inner: Optional["SqlType"] = None
    length: int = 0
    precision: int = 0
    scale: int = 0
    tz: Optional[tzinfo] = None
    enum_values: tuple = ()
    items: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "enum_values", tuple((str(name), int(value)) for name, value in self.enum_values)
        )
        object.__setattr__(self, "items", tuple(self.items))
        if self.kind in (TypeKind.NULLABLE, TypeKind.ARRAY) and self.inner is None:
            raise ColumnError(f"{self.kind.value} type needs an inner type")

    def is_datetime(self) -> bool:
        """True for every date-time flavour."""
        return self.kind in (TypeKind.DATETIME, TypeKind.DATETIME64, TypeKind.AWARE_DATETIME)

    def __str__(self) -> str:
        kind = self.kind
        if kind is TypeKind.AWARE_DATETIME:
            return TypeKind.DATETIME.value
        if kind is TypeKind.FIXED_STRING:
            return f"FixedString({self.length})"
        if kind in (TypeKind.NULLABLE, TypeKind.ARRAY):
            return f"{kind.value}({self.inner})"
        if kind is TypeKind.DECIMAL:
            return f"Decimal({self.precision}, {self.scale})"
        if kind in (TypeKind.ENUM8, TypeKind.ENUM16):
            body = ", ".join(f"{_quote(name)} = {value}" for name, value in self.enum_values)
            return f"{kind.value}({body})"
        if kind is TypeKind.TUPLE:
            return f"Tuple({', '.join(str(item) for item in self.items)})"
        if kind is TypeKind.DATETIME64:
            if self.tz is None:
                return f"DateTime64({self.precision})"
            return f"DateTime64({self.precision}, {_quote(_tz_name(self.tz))})"
        return kind.value


class Encoder:
    """Accumulates little-endian binary output."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write(self, fmt: str, value: Any) -> None:
        """Append one value packed with a struct format character."""
        try:
            self._buffer += struct.pack("<" + fmt, value)
        except (struct.error, OverflowError) as exc:
            raise ColumnError(f"cannot encode {value!r} as {fmt!r}: {exc}") from exc

    def write_bytes(self, data: bytes) -> None:
        self._buffer += data

    def uvarint(self, value: int) -> None:
        """Append an unsigned LEB128 integer."""
        if value < 0:
            raise ColumnError(f"uvarint must not be negative: {value}")
        while True:
            byte = value & 0x7F
            value >>= 7
            if value:
                self._buffer.append(byte | 0x80)
            else:
                self._buffer.append(byte)
                return

    def string(self, text: str | bytes) -> None:
        """Append a length-prefixed string."""
        data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        self.uvarint(len(data))
        self.write_bytes(data)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


class Reader:
    """Reads binary input produced in the encoder's format."""

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(bytes(data))
        self._pos = 0

    def read_bytes(self, size: int) -> bytes:
        if size < 0:
            raise ColumnError(f"cannot read a negative number of bytes: {size}")
        end = self._pos + size
        if end > len(self._data):
            raise ColumnError("unexpected end of data")
        chunk = bytes(self._data[self._pos:end])
        self._pos = end
        return chunk

    def read_uvarint(self) -> int:
        result = 0
        for shift in range(0, 70, 7):
            (byte,) = self.read_bytes(1)
            result |= (byte & 0x7F) << shift
            if byte < 0x80:
                return result
        raise ColumnError("uvarint is too long")

    def read_string(self) -> str:
        raw = self.read_bytes(self.read_uvarint())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ColumnError("string is not valid UTF-8") from exc


class ColumnData(ABC):
    """The storage behind a column."""

    @abstractmethod
    def sql_type(self) -> SqlType:
        """The SQL type of the stored values."""

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        """Write the values in [start, end) to the encoder."""
        raise ColumnError(f"{type(self).__name__} cannot be saved")

    @abstractmethod
    def __len__(self) -> int:
        """Number of rows."""

    def push(self, value: Any) -> None:
        """Append one value."""
        raise ColumnError(f"{type(self).__name__} does not accept new values")

    @abstractmethod
    def at(self, index: int) -> Any:
        """The value at a row."""

    def clone(self) -> "ColumnData":
        """An independent copy."""
        raise ColumnError(f"{type(self).__name__} cannot be cloned")

    def cast_to(self, target: SqlType) -> Optional["ColumnData"]:
        """A view of this column as another type, or None if unsupported."""
        return None

    def __iter__(self) -> Iterator[Any]:
        return (self.at(index) for index in range(len(self)))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self):
            raise IndexError(f"index {index} out of range for column of length {len(self)}")

    def _check_range(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self):
            raise IndexError(f"range {start}..{end} out of bounds for column of length {len(self)}")