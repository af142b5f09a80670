"""Parsers for the textual names of column types."""

from __future__ import annotations

import re
from datetime import tzinfo
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .column_data import ColumnError, NoBits

_UNSIGNED = re.compile(r"\+?[0-9]+")
_DIGITS = frozenset("0123456789")

_U8_MAX = 0xFF
_U32_MAX = 0xFFFF_FFFF
_USIZE_MAX = 0xFFFF_FFFF_FFFF_FFFF
_I16_MIN = -0x8000
_I16_MAX = 0x7FFF


def _parse_unsigned(text: str, limit: int) -> Optional[int]:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= limit else None


def _wrapped_body(source: str, prefix: str) -> Optional[str]:
    """The text between ``prefix(`` and the final character, if there is room for it."""
    if not source.startswith(prefix):
        return None
    opening = len(prefix) + 1
    if len(source) <= opening:
        return None
    return source[opening:-1]


def parse_fixed_string(source: str) -> Optional[int]:
    """The length of a ``FixedString(N)`` type name, or None."""
    body = _wrapped_body(source, "FixedString")
    if body is None:
        return None
    return _parse_unsigned(body, _USIZE_MAX)


def parse_nullable_type(source: str) -> Optional[str]:
    """The inner type name of ``Nullable(T)``; nested Nullable is rejected."""
    inner = _wrapped_body(source, "Nullable")
    if inner is None or inner.startswith("Nullable"):
        return None
    return inner


def parse_array_type(source: str) -> Optional[str]:
    """The inner type name of ``Array(T)``, or None."""
    return _wrapped_body(source, "Array")


def parse_decimal(source: str) -> Optional[tuple[int, int, NoBits]]:
    """Precision, scale and storage width of a Decimal type name, or None."""
    if len(source.encode("utf-8")) < 12 or not source.startswith("Decimal"):
        return None

    nobits: Optional[NoBits] = None
    open_at: Optional[int] = None
    close_at: Optional[int] = None
    for idx, char in enumerate(source):
        if char == "(":
            prefix = source[:idx]
            if prefix == "Decimal32":
                nobits = NoBits.N32
            elif prefix == "Decimal64":
                nobits = NoBits.N64
            elif prefix != "Decimal":
                return None
            open_at = idx
        if char == ")":
            close_at = idx

    if open_at is None or close_at is None:
        return None
    body = source[open_at + 1:close_at]

    precision: Optional[int] = None
    scale: Optional[int] = None
    if nobits is not None:
        scale = _parse_unsigned(body, _U8_MAX)
    else:
        for idx, cell in enumerate(part.strip() for part in body.split(",")):
            if idx == 0:
                precision = _parse_unsigned(cell, _U8_MAX)
            elif idx == 1:
                scale = _parse_unsigned(cell, _U8_MAX)
            else:
                return None

    if nobits is None:
        if precision is None or scale is None or scale > precision:
            return None
        bits = NoBits.from_precision(precision)
        return None if bits is None else (precision, scale, bits)
    if scale is None:
        return None
    return (9 if nobits is NoBits.N32 else 18, scale, nobits)


class EnumSize(Enum):
    """Which enum type name to parse."""

    ENUM8 = "Enum8"
    ENUM16 = "Enum16"


class _ParseError(Exception):
    pass


class _Cursor:
    """A position in a type name with the small grammar the parsers need."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return "" if self.at_end() else self.text[self.pos]

    def spaces(self) -> None:
        while not self.at_end() and self.text[self.pos].isspace():
            self.pos += 1

    def expect(self, token: str) -> None:
        if not self.text.startswith(token, self.pos):
            raise _ParseError(f"expected {token!r} at {self.pos}")
        self.pos += len(token)

    def digits(self) -> str:
        start = self.pos
        while not self.at_end() and self.text[self.pos] in _DIGITS:
            self.pos += 1
        if self.pos == start:
            raise _ParseError(f"expected a digit at {start}")
        return self.text[start:self.pos]

    def quoted(self) -> str:
        """A single-quoted word in which a backslash escapes the next character."""
        self.expect("'")
        chars: list[str] = []
        while True:
            if self.at_end():
                raise _ParseError("unterminated quoted word")
            char = self.text[self.pos]
            if char == "'":
                self.pos += 1
                return "".join(chars)
            if char == "\\":
                if self.pos + 1 >= len(self.text):
                    raise _ParseError("dangling escape")
                chars.append(self.text[self.pos + 1])
                self.pos += 2
            else:
                chars.append(char)
                self.pos += 1

    def enum_integer(self) -> int:
        negative = self.peek() == "-"
        if negative:
            self.pos += 1
        value = int(self.digits())
        if negative:
            value = -value
        if not _I16_MIN <= value <= _I16_MAX:
            raise _ParseError(f"{value} does not fit a 16-bit integer")
        return value

    def enum_pair(self) -> tuple[str, int]:
        self.spaces()
        name = self.quoted()
        self.spaces()
        self.expect("=")
        self.spaces()
        value = self.enum_integer()
        self.spaces()
        return name, value


def parse_enum(size: EnumSize, input: str) -> Optional[list[tuple[str, int]]]:
    """The ``(name, value)`` items of an enum type name, values as 16-bit integers."""
    cursor = _Cursor(input)
    try:
        cursor.spaces()
        cursor.expect(size.value)
        cursor.spaces()
        cursor.expect("(")
        cursor.spaces()
        items = [cursor.enum_pair()]
        while cursor.peek() == ",":
            cursor.pos += 1
            items.append(cursor.enum_pair())
        cursor.expect(")")
    except _ParseError:
        return None
    if not cursor.at_end():
        return None
    return items


def _wrap_i8(value: int) -> int:
    return (value + 0x80) % 0x100 - 0x80


def parse_enum8(input: str) -> Optional[list[tuple[str, int]]]:
    """Items of an ``Enum8`` type name; values wrap to 8 bits."""
    items = parse_enum(EnumSize.ENUM8, input)
    if items is None:
        return None
    return [(name, _wrap_i8(value)) for name, value in items]


def parse_enum16(input: str) -> Optional[list[tuple[str, int]]]:
    """Items of an ``Enum16`` type name."""
    return parse_enum(EnumSize.ENUM16, input)


def parse_date_time64(source: str) -> Optional[tuple[int, Optional[str]]]:
    """Precision and optional time-zone name of a ``DateTime64`` type name."""
    cursor = _Cursor(source)
    try:
        cursor.spaces()
        cursor.expect("DateTime64")
        cursor.spaces()
        cursor.expect("(")
        cursor.spaces()
        precision = _parse_unsigned(cursor.digits(), _U32_MAX)
        if precision is None:
            return None
        cursor.spaces()
        timezone_name: Optional[str] = None
        if cursor.peek() == ",":
            cursor.pos += 1
            cursor.spaces()
            timezone_name = cursor.quoted()
        cursor.spaces()
        cursor.expect(")")
    except _ParseError:
        return None
    if not cursor.at_end():
        return None
    return precision, timezone_name


def get_timezone(timezone: Optional[str], tz: tzinfo) -> tzinfo:
    """The named time zone, or ``tz`` when no name is given."""
    if timezone is None:
        return tz
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ColumnError(f"unknown time zone {timezone!r}") from exc


def parse_tuple_type(source: str) -> Optional[list[str]]:
    """The element type names of ``Tuple(...)``, split at top-level commas."""
    body = _wrapped_body(source, "Tuple")
    if body is None:
        return None

    inner_types: list[str] = []
    depth = 0
    last = 0
    for idx, char in enumerate(body):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            inner_types.append(body[last:idx].strip())
            last = idx + 1

    if last < len(body):
        inner_types.append(body[last:].strip())

    return inner_types or None