from datetime import date, datetime, timedelta, timezone

import pytest

from chcolumns.column_data import ColumnError, Encoder, Reader, SqlType, TypeKind
from chcolumns.dates import DateColumnData

PLUS_THREE = timezone(timedelta(hours=3))


def saved(column):
    encoder = Encoder()
    column.save(encoder, 0, len(column))
    return encoder.getvalue()


def test_from_dates_round_trip():
    dates = [date(1970, 1, 1), date(2000, 2, 29), date(2024, 12, 31)]
    column = DateColumnData.from_dates(dates)
    assert column.sql_type() == SqlType(TypeKind.DATE)
    assert list(column) == dates


def test_date_wire_bytes():
    column = DateColumnData.from_dates([date(1970, 1, 1), date(1970, 1, 2)])
    assert saved(column) == b"\x00\x00\x01\x00"


def test_datetime_wire_bytes():
    column = DateColumnData(TypeKind.DATETIME, timezone.utc)
    column.push(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc))
    assert saved(column) == b"\x01\x00\x00\x00"


def test_datetime_save_load_round_trip_keeps_zone():
    column = DateColumnData(TypeKind.DATETIME, PLUS_THREE)
    moments = [
        datetime(2021, 5, 6, 7, 8, 9, tzinfo=timezone.utc),
        datetime(1999, 12, 31, 23, 59, 59, tzinfo=PLUS_THREE),
    ]
    for moment in moments:
        column.push(moment)
    loaded = DateColumnData.load(Reader(saved(column)), TypeKind.DATETIME, len(column), PLUS_THREE)
    assert list(loaded) == moments
    assert all(value.utcoffset() == timedelta(hours=3) for value in loaded)
    assert loaded.sql_type() == SqlType(TypeKind.DATETIME)


def test_date_save_load_round_trip():
    column = DateColumnData.from_dates([date(2010, 7, 4), date(1985, 1, 1)])
    loaded = DateColumnData.load(Reader(saved(column)), TypeKind.DATE, len(column), timezone.utc)
    assert list(loaded) == list(column)


def test_subsecond_part_is_dropped():
    column = DateColumnData(TypeKind.DATETIME, timezone.utc)
    moment = datetime(2020, 1, 1, 12, 0, 0, 500000, tzinfo=timezone.utc)
    column.push(moment)
    assert column.at(0) == moment.replace(microsecond=0)


def test_naive_datetime_rejected():
    column = DateColumnData(TypeKind.DATETIME, timezone.utc)
    with pytest.raises(ColumnError):
        column.push(datetime(2020, 1, 1))


def test_datetime_rejected_in_date_column():
    column = DateColumnData(TypeKind.DATE)
    with pytest.raises(ColumnError):
        column.push(datetime(2020, 1, 1, tzinfo=timezone.utc))


def test_date_before_epoch_rejected():
    with pytest.raises(ColumnError):
        DateColumnData.from_dates([date(1969, 12, 31)])


def test_unsupported_kind_rejected():
    with pytest.raises(ColumnError):
        DateColumnData(TypeKind.STRING)


def test_at_out_of_range():
    column = DateColumnData.from_dates([date(2001, 1, 1)])
    with pytest.raises(IndexError):
        column.at(1)


def test_save_out_of_range():
    column = DateColumnData.from_dates([date(2001, 1, 1)])
    with pytest.raises(IndexError):
        column.save(Encoder(), 0, 2)


def test_clone_is_independent():
    column = DateColumnData.from_dates([date(2001, 1, 1)])
    duplicate = column.clone()
    duplicate.push(date(2002, 2, 2))
    assert len(column) == 1
    assert len(duplicate) == 2
    assert duplicate.at(0) == column.at(0)