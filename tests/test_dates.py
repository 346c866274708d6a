import datetime as dt

import pytest

from pemlens.dates import normalize_date, to_asn1_time


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("240101120000Z", "2024-01-01 12:00:00"),
        ("991231235959Z", "1999-12-31 23:59:59"),
        ("491231235959Z", "2049-12-31 23:59:59"),
        ("500101000000Z", "1950-01-01 00:00:00"),
        ("240101120000", "2024-01-01 12:00:00"),
        ("20300615093000Z", "2030-06-15 09:30:00"),
        ("19491231000000Z", "1949-12-31 00:00:00"),
    ],
)
def test_normalize_asn1_times(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "2024-01-01 12:00:00", "2401011200Z", "not a date", "²40101120000Z", "２４０１０１１２００００Z"],
)
def test_unrecognized_input_passes_through(raw):
    assert normalize_date(raw) == raw


def test_normalize_is_idempotent():
    once = normalize_date("240101120000Z")
    assert normalize_date(once) == once


def test_to_asn1_time_switches_encoding_at_2050():
    utc = dt.timezone.utc
    assert to_asn1_time(dt.datetime(2049, 12, 31, 23, 59, 59, tzinfo=utc)) == "491231235959Z"
    assert to_asn1_time(dt.datetime(2050, 1, 1, 0, 0, 0, tzinfo=utc)) == "20500101000000Z"
    assert to_asn1_time(dt.datetime(1949, 6, 1, 8, 0, 0)) == "19490601080000Z"


def test_to_asn1_time_converts_to_utc():
    cet = dt.timezone(dt.timedelta(hours=1))
    assert to_asn1_time(dt.datetime(2024, 1, 1, 13, 0, 0, tzinfo=cet)) == "240101120000Z"
