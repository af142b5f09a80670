# chcolumns

In-memory storage for ClickHouse column types. Each storage class reads its
values from, and writes them to, the little-endian layout of the ClickHouse
native block format. It is pure Python and has no runtime dependencies. Named
time zones come from the standard `zoneinfo` module.

## Installation

    pip install chcolumns

## Modules

- `chcolumns.column_data`
  - `SqlType` describes a column type and `TypeKind` names its kind.
    `str(SqlType(...))` gives the ClickHouse type name, for example
    `FixedString(8)`, `Nullable(UInt8)`, `Decimal(9, 2)` or
    `DateTime64(3, 'UTC')`.
  - `NoBits` is the storage width of a decimal. `NoBits.from_precision(p)`
    returns `N32` for precisions 1 to 9, `N64` for 10 to 18, and `None` for
    anything else.
  - `Encoder` collects the output. It offers `write(fmt, value)` for one value
    packed little-endian with a `struct` format character, plus `write_bytes`,
    `uvarint`, `string` and `getvalue`.
  - `Reader` is the matching input side, with `read_bytes`, `read_uvarint` and
    `read_string`.
  - `ColumnData` is the abstract base of all storage classes. It defines
    `sql_type()`, `len()`, `at(index)`, `save(encoder, start, end)`,
    `push(value)`, `clone()` and `cast_to(target)`, and supports iteration.
  - `ColumnError` is raised for bad values, bad input data and unsupported
    operations.
- `chcolumns.typed_list.TypedList` is a list of fixed-width numbers. It
  converts to and from little-endian bytes with `to_bytes()` and
  `TypedList.from_bytes(fmt, data)`.
- `chcolumns.dates.DateColumnData` holds two kinds of column. `Date` stores
  16-bit day counts and returns `datetime.date`. `DateTime` stores 32-bit
  second counts and returns aware `datetime` values in the column's zone.
- `chcolumns.datetime64`
  - `DateTime64ColumnData` stores signed 64-bit ticks at a precision from 0
    to 9.
  - `from_datetime(time, precision)` and `to_datetime(value, precision, tz)`
    convert between aware datetimes and ticks.
- `chcolumns.chrono_datetime`
  - `ChronoDateTimeColumnData` keeps aware datetimes as they were given. Its
    `cast_to` accepts a `DateTime` or `DateTime64` target and returns a
    `ChronoDateTimeAdapter`, which writes the values in that layout.
- `chcolumns.fixed_string`
  - `FixedStringColumnData` stores zero-padded strings of a fixed length.
  - `FixedStringAdapter` and `NullableFixedStringAdapter` write a string
    column, or a column of byte lists, as `FixedString(N)` or
    `Nullable(FixedString(N))`.
- `chcolumns.ip`
  - `IpColumnData` holds `IPv4Address`, `IPv6Address` or `uuid.UUID` values
    in their native byte order. `IpVersion` selects which of the three.
- `chcolumns.enums`
  - `EnumColumnData` stores `Enum8` or `Enum16` values. `push` accepts either
    an item's integer value or its name.
  - `EnumAdapter` and `NullableEnumAdapter` present an existing enum column
    under another list of items.
- `chcolumns.concat`
  - `ConcatColumnData` reads several columns of the same type as one column.
  - `build_index` and `find_chunk` are the offset helpers it uses.
- `chcolumns.chunk.ChunkColumnData` is a read-only window onto rows
  `[start, end)` of another column.
- `chcolumns.typenames` parses type names with `parse_nullable_type`,
  `parse_array_type`, `parse_fixed_string`, `parse_decimal`, `parse_enum8`,
  `parse_enum16`, `parse_enum`, `parse_date_time64` and `parse_tuple_type`.
  Each parser returns `None` when the name does not match.
  `get_timezone(name, default)` resolves a zone name.

## Example

```python
from datetime import date, datetime, timezone
from ipaddress import IPv4Address

from chcolumns.column_data import Encoder, Reader
from chcolumns.dates import DateColumnData
from chcolumns.datetime64 import DateTime64ColumnData
from chcolumns.ip import IpColumnData, IpVersion
from chcolumns.typenames import parse_date_time64, parse_decimal, parse_enum8

dates = DateColumnData.from_dates([date(2024, 1, 2), date(2024, 3, 4)])
print(dates.sql_type(), dates.at(1))          # Date 2024-03-04

ticks = DateTime64ColumnData(3, timezone.utc)
ticks.push(datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc))
print(ticks.sql_type(), ticks.at(0))          # DateTime64(3) 2024-01-02 03:04:05.678000+00:00

ips = IpColumnData.from_values([IPv4Address("10.0.0.1"), IPv4Address("10.0.0.2")])
out = Encoder()
ips.save(out, 0, len(ips))
again = IpColumnData.load(Reader(out.getvalue()), IpVersion.IPV4, 2)
print(list(again))                            # [IPv4Address('10.0.0.1'), IPv4Address('10.0.0.2')]

print(parse_decimal("Decimal(9, 2)"))         # (9, 2, <NoBits.N32: 32>)
print(parse_enum8("Enum8('a' = 1, 'b' = 2)")) # [('a', 1), ('b', 2)]
print(parse_date_time64("DateTime64(3, 'UTC')"))  # (3, 'UTC')
```

## What it does not do

The package provides storage classes and type-name parsers only. It has none
of the following:

- no named column object that holds a name together with its data;
- no reader for the column header of a native block (name and type name);
- no function that picks a storage class from a type name or a `SqlType`;
- no storage for plain numeric, `String`, `Nullable`, `Array`, `Tuple` or
  `Decimal` columns.

`SqlType` can describe all of these types, and the parsers recognise their
names. Building and reading columns of those types is left to the caller. The
package also does not connect to a server and does not run queries.

## Running the tests

    pip install -e ".[test]"
    pytest