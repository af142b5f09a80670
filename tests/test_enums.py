import pytest

from chcolumns.column_data import ColumnData, ColumnError, Encoder, Reader, SqlType, TypeKind
from chcolumns.enums import EnumAdapter, EnumColumnData, NullableEnumAdapter

ITEMS = [("a", 1), ("b", -1)]


class _NullableEnum(ColumnData):
    def __init__(self, kind, values):
        self._kind = kind
        self._values = list(values)

    def sql_type(self):
        return SqlType(TypeKind.NULLABLE, inner=SqlType(self._kind, enum_values=ITEMS))

    def __len__(self):
        return len(self._values)

    def at(self, index):
        return self._values[index]


def _saved(column):
    encoder = Encoder()
    column.save(encoder, 0, len(column))
    return encoder.getvalue()


def test_enum8_wire_bytes():
    column = EnumColumnData(8, ITEMS, [1, -1])
    assert _saved(column) == b"\x01\xff"


def test_enum16_wire_bytes():
    column = EnumColumnData(16, ITEMS, [1])
    assert _saved(column) == b"\x01\x00"


def test_sql_type_names_items():
    column = EnumColumnData(8, ITEMS)
    assert str(column.sql_type()) == "Enum8('a' = 1, 'b' = -1)"
    assert column.sql_type().kind is TypeKind.ENUM8


@pytest.mark.parametrize("width", [8, 16])
def test_save_load_round_trip(width):
    column = EnumColumnData(width, ITEMS, [1, -1, 1])
    loaded = EnumColumnData.load(Reader(_saved(column)), width, ITEMS, 3)
    assert list(loaded) == [1, -1, 1]
    assert loaded.sql_type() == column.sql_type()


def test_push_by_name_and_value():
    column = EnumColumnData(16, ITEMS)
    column.push("b")
    column.push(1)
    assert list(column) == [-1, 1]


def test_push_unknown_name_raises():
    with pytest.raises(ColumnError):
        EnumColumnData(8, ITEMS).push("zzz")


def test_push_out_of_range_raises():
    with pytest.raises(ColumnError):
        EnumColumnData(8, ITEMS).push(1000)


def test_bad_width_raises():
    with pytest.raises(ColumnError):
        EnumColumnData(32, ITEMS)


def test_clone_is_independent():
    column = EnumColumnData(8, ITEMS, [1])
    duplicate = column.clone()
    duplicate.push(-1)
    assert len(column) == 1
    assert list(duplicate) == [1, -1]


def test_adapter_renames_and_saves_same_values():
    column = EnumColumnData(16, ITEMS, [1, -1])
    renamed = [("x", 1), ("y", -1)]
    adapter = EnumAdapter(column, renamed)
    assert adapter.sql_type() == SqlType(TypeKind.ENUM16, enum_values=renamed)
    assert len(adapter) == 2
    assert adapter.at(1) == -1
    assert _saved(adapter) == _saved(column)


def test_adapter_rejects_non_enum_column():
    with pytest.raises(ColumnError):
        EnumAdapter(_NullableEnum(TypeKind.ENUM8, [1]), ITEMS)


def test_nullable_adapter_save_layout():
    adapter = NullableEnumAdapter(_NullableEnum(TypeKind.ENUM8, [1, None, -1]), ITEMS)
    encoder = Encoder()
    adapter.save(encoder, 0, 3)
    assert encoder.getvalue() == b"\x00\x01\x00" + b"\x01\x00\xff"
    assert adapter.at(1) is None
    assert adapter.sql_type().inner.kind is TypeKind.ENUM8


def test_nullable_adapter_enum16_width():
    adapter = NullableEnumAdapter(_NullableEnum(TypeKind.ENUM16, [None, 1]), ITEMS)
    encoder = Encoder()
    adapter.save(encoder, 0, 2)
    assert encoder.getvalue() == b"\x01\x00" + b"\x00\x00\x01\x00"