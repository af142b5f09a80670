"""IPv4, IPv6 and UUID columns stored as raw fixed-width bytes."""

from __future__ import annotations

import uuid
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from typing import Any, Iterable, Union

from .column_data import ColumnData, ColumnError, Encoder, Reader, SqlType, TypeKind

Address = Union[IPv4Address, IPv6Address, uuid.UUID]


class IpVersion(Enum):
    """The kind of value held by an address column."""

    IPV4 = TypeKind.IPV4
    IPV6 = TypeKind.IPV6
    UUID = TypeKind.UUID

    @property
    def size(self) -> int:
        """Bytes per stored value."""
        return 4 if self is IpVersion.IPV4 else 16

    @property
    def python_type(self) -> type:
        return {
            IpVersion.IPV4: IPv4Address,
            IpVersion.IPV6: IPv6Address,
            IpVersion.UUID: uuid.UUID,
        }[self]

    def encode(self, value: Any) -> bytes:
        """The stored bytes of one value."""
        if not isinstance(value, self.python_type):
            raise ColumnError(f"expected {self.python_type.__name__}, got {value!r}")
        if self is IpVersion.IPV4:
            return value.packed[::-1]
        if self is IpVersion.IPV6:
            return value.packed
        raw = value.bytes
        return raw[:8][::-1] + raw[8:][::-1]

    def decode(self, chunk: bytes) -> Address:
        """The value that stored bytes denote."""
        if self is IpVersion.IPV4:
            return IPv4Address(chunk[::-1])
        if self is IpVersion.IPV6:
            return IPv6Address(chunk)
        return uuid.UUID(bytes=chunk[:8][::-1] + chunk[8:][::-1])


def _version_of(value: Any) -> IpVersion:
    for version in IpVersion:
        if isinstance(value, version.python_type):
            return version
    raise ColumnError(f"not an address or UUID: {value!r}")


class IpColumnData(ColumnData):
    """A column of IPv4, IPv6 or UUID values."""

    def __init__(self, version: IpVersion, raw: bytes = b"") -> None:
        if len(raw) % version.size:
            raise ColumnError(f"buffer is not a whole number of {version.size}-byte values")
        self.version = version
        self._raw = bytearray(raw)

    @classmethod
    def with_capacity(cls, version: IpVersion, capacity: int) -> "IpColumnData":
        """A column of ``capacity`` zero-filled rows."""
        return cls(version, bytes(capacity * version.size))

    @classmethod
    def load(cls, reader: Reader, version: IpVersion, size: int) -> "IpColumnData":
        return cls(version, reader.read_bytes(size * version.size))

    @classmethod
    def from_values(cls, values: Iterable[Address]) -> "IpColumnData":
        """A column of addresses or UUIDs, all of one kind."""
        values = list(values)
        if not values:
            raise ColumnError("cannot tell the column kind from no values")
        version = _version_of(values[0])
        return cls(version, b"".join(version.encode(value) for value in values))

    @property
    def raw(self) -> bytes:
        """The stored bytes."""
        return bytes(self._raw)

    def sql_type(self) -> SqlType:
        return SqlType(self.version.value)

    def save(self, encoder: Encoder, start: int, end: int) -> None:
        self._check_range(start, end)
        size = self.version.size
        encoder.write_bytes(bytes(self._raw[start * size:end * size]))

    def __len__(self) -> int:
        return len(self._raw) // self.version.size

    def push(self, value: Address) -> None:
        self._raw += self.version.encode(value)

    def at(self, index: int) -> Address:
        self._check_index(index)
        size = self.version.size
        return self.version.decode(bytes(self._raw[index * size:(index + 1) * size]))

    def clone(self) -> "IpColumnData":
        return type(self)(self.version, self._raw)