"""A list of fixed-width numbers with a little-endian byte form."""

from __future__ import annotations

import struct
from typing import Any, Iterable, Iterator

from .column_data import ColumnError


class TypedList:
    """Numbers of one struct format, stored as they would round-trip through bytes."""

    __slots__ = ("fmt", "_codec", "_data")

    def __init__(self, fmt: str, values: Iterable[Any] = ()) -> None:
        try:
            self._codec = struct.Struct("<" + fmt)
        except struct.error as exc:
            raise ColumnError(f"unknown format {fmt!r}") from exc
        self.fmt = fmt
        self._data: list[Any] = []
        for value in values:
            self.push(value)

    @property
    def itemsize(self) -> int:
        return self._codec.size

    def _normalise(self, value: Any) -> Any:
        try:
            packed = self._codec.pack(value)
        except (struct.error, OverflowError, TypeError) as exc:
            raise ColumnError(f"{value!r} does not fit format {self.fmt!r}") from exc
        return self._codec.unpack(packed)[0]

    def __len__(self) -> int:
        return len(self._data)

    def at(self, index: int) -> Any:
        if not 0 <= index < len(self._data):
            raise IndexError(f"index {index} out of range for list of length {len(self._data)}")
        return self._data[index]

    def push(self, value: Any) -> None:
        self._data.append(self._normalise(value))

    def resize(self, new_len: int, value: Any) -> None:
        """Truncate to new_len or extend with copies of value."""
        if new_len < 0:
            raise ColumnError(f"length must not be negative: {new_len}")
        if new_len <= len(self._data):
            del self._data[new_len:]
        else:
            filler = self._normalise(value)
            self._data.extend([filler] * (new_len - len(self._data)))

    def to_bytes(self) -> bytes:
        return struct.pack(f"<{len(self._data)}{self.fmt}", *self._data)

    @classmethod
    def from_bytes(cls, fmt: str, data: bytes) -> "TypedList":
        instance = cls(fmt)
        if len(data) % instance.itemsize:
            raise ColumnError(
                f"{len(data)} bytes is not a whole number of {instance.itemsize}-byte items"
            )
        instance._data = [value for (value,) in instance._codec.iter_unpack(data)]
        return instance

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __getitem__(self, key):
        return self._data[key]

    def __copy__(self) -> "TypedList":
        duplicate = type(self)(self.fmt)
        duplicate._data = list(self._data)
        return duplicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedList):
            return NotImplemented
        return self.fmt == other.fmt and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TypedList({self.fmt!r}, {self._data!r})"