from datetime import timezone

import pytest

from chcolumns.column_data import ColumnError, NoBits
from chcolumns.typenames import (
    EnumSize,
    get_timezone,
    parse_array_type,
    parse_date_time64,
    parse_decimal,
    parse_enum,
    parse_enum8,
    parse_enum16,
    parse_fixed_string,
    parse_nullable_type,
    parse_tuple_type,
)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("FixedString(16)", 16),
        ("FixedString(abc)", None),
        ("FixedString", None),
        ("String", None),
    ],
)
def test_parse_fixed_string(source, expected):
    assert parse_fixed_string(source) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("Nullable(UInt8)", "UInt8"),
        ("Nullable(Array(String))", "Array(String)"),
        ("Nullable(Nullable(UInt8))", None),
        ("UInt8", None),
        ("Nullable", None),
    ],
)
def test_parse_nullable_type(source, expected):
    assert parse_nullable_type(source) == expected


def test_parse_array_type():
    assert parse_array_type("Array(Array(String))") == "Array(String)"
    assert parse_array_type("String") is None


@pytest.mark.parametrize(
    "source, expected",
    [
        ("Decimal(9, 4)", (9, 4, NoBits.N32)),
        ("Decimal(18,2)", (18, 2, NoBits.N64)),
        ("Decimal32(3)", (9, 3, NoBits.N32)),
        ("Decimal64(5)", (18, 5, NoBits.N64)),
        ("Decimal(4, 9)", None),
        ("Decimal(19, 2)", None),
        ("Decimal128(5)", None),
        ("Decimal(1,2,3)", None),
        ("Decimal(5)", None),
        ("Decimal(a, 2)", None),
        ("Float64(1, 2)", None),
    ],
)
def test_parse_decimal(source, expected):
    assert parse_decimal(source) == expected


def test_parse_enum8_items():
    assert parse_enum8("Enum8('a' = 1, 'b' = 2)") == [("a", 1), ("b", 2)]


def test_parse_enum16_negative_values():
    assert parse_enum16("Enum16('red' = -1000, 'green' = 2000)") == [
        ("red", -1000),
        ("green", 2000),
    ]


def test_parse_enum_allows_spaces():
    assert parse_enum8("  Enum8 ( 'a'=1 ,'b'  =  2 )") == [("a", 1), ("b", 2)]


def test_parse_enum_escaped_quote():
    assert parse_enum8("Enum8('it\\'s' = 1)") == [("it's", 1)]


@pytest.mark.parametrize(
    "source",
    [
        "Enum8('a' = 1) x",
        "Enum16('a' = 1)",
        "Enum8()",
        "Enum8('a' = 1,)",
        "Enum8('a' 1)",
        "Enum8('a = 1)",
    ],
)
def test_parse_enum8_rejects(source):
    assert parse_enum8(source) is None


def test_parse_enum16_out_of_range():
    assert parse_enum16("Enum16('a' = 40000)") is None


def test_parse_enum8_wraps_to_eight_bits():
    assert parse_enum(EnumSize.ENUM8, "Enum8('a' = 200)") == [("a", 200)]
    assert parse_enum8("Enum8('a' = 200)") == [("a", -56)]


@pytest.mark.parametrize(
    "source, expected",
    [
        ("DateTime64(3)", (3, None)),
        ("DateTime64(6, 'Europe/Moscow')", (6, "Europe/Moscow")),
        (" DateTime64 ( 9 , 'UTC' ) ", None),
        ("DateTime64 ( 9 , 'UTC' )", (9, "UTC")),
        ("DateTime64(3", None),
        ("DateTime64(3, )", None),
        ("DateTime64(-1)", None),
        ("DateTime(3)", None),
    ],
)
def test_parse_date_time64(source, expected):
    assert parse_date_time64(source) == expected


def test_get_timezone_default():
    assert get_timezone(None, timezone.utc) is timezone.utc


def test_get_timezone_unknown_name():
    with pytest.raises(ColumnError):
        get_timezone("Not/AZone", timezone.utc)


def test_parse_tuple_type_splits_top_level():
    assert parse_tuple_type("Tuple(UInt8, Array(String), Decimal(9, 4))") == [
        "UInt8",
        "Array(String)",
        "Decimal(9, 4)",
    ]


@pytest.mark.parametrize("source", ["Tuple()", "UInt8", "Tuple"])
def test_parse_tuple_type_rejects(source):
    assert parse_tuple_type(source) is None