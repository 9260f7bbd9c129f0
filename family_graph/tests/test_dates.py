import pytest

from family_graph.dates import (
    UNKNOWN_DATE,
    AboutYearDate,
    AfterYearDate,
    BeforeYearDate,
    PreciseDate,
    YearDate,
    parse_date,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1900", YearDate(1900)),
        ("12 MAR 1901", PreciseDate(1901, 3, 12)),
        ("MAR 1901", PreciseDate(1901, 3)),
        ("ABT 1900", AboutYearDate(1900)),
        ("EST 1850", AboutYearDate(1850)),
        ("BEF 1870", BeforeYearDate(1870)),
        ("AFT 1870", AfterYearDate(1870)),
        ("BET 1900 AND 1910", AboutYearDate(1900)),
        ("", UNKNOWN_DATE),
        (None, UNKNOWN_DATE),
    ]
)
def test_parse_date(text, expected):
    assert parse_date(text) == expected


@pytest.mark.parametrize(
    "date,when",
    [
        (YearDate(1900), "in 1900"),
        (AboutYearDate(1900), "about 1900"),
        (BeforeYearDate(1870), "before 1870"),
        (AfterYearDate(1870), "after 1870"),
        (PreciseDate(1901, 3, 12), "on 12 Mar 1901"),
        (PreciseDate(1901, 3), "in Mar 1901"),
        (UNKNOWN_DATE, "unknown date"),
    ]
)
def test_when(date, when):
    assert date.when() == when


def test_sorts_before_within_year():
    assert BeforeYearDate(1900).sorts_before(YearDate(1900))
    assert YearDate(1900).sorts_before(AfterYearDate(1900))
    assert PreciseDate(1900, 2).sorts_before(PreciseDate(1900, 3, 1))
    assert not YearDate(1900).sorts_before(YearDate(1900))


def test_year_only_dates_sort_at_start_of_year():
    assert not YearDate(1900).sorts_before(AboutYearDate(1900))
    assert not AboutYearDate(1900).sorts_before(YearDate(1900))
    assert YearDate(1900).sorts_before(PreciseDate(1900, 1, 1))
    assert AboutYearDate(1900).sorts_before(PreciseDate(1900, 3))
    assert not PreciseDate(1900, 3, 1).sorts_before(YearDate(1900))
    assert PreciseDate(1900, 12, 31).sorts_before(AfterYearDate(1900))
    assert BeforeYearDate(1900).sorts_before(AboutYearDate(1900))


def test_unknown_sorts_after_everything():
    assert YearDate(2100).sorts_before(UNKNOWN_DATE)
    assert not UNKNOWN_DATE.sorts_before(YearDate(1))
    assert not UNKNOWN_DATE.sorts_before(UNKNOWN_DATE)


@pytest.mark.parametrize(
    "date,expected",
    [
        (YearDate(2000), 24),
        (AboutYearDate(2000), 24),
        (PreciseDate(2000, 6, 1), 24),
        (BeforeYearDate(2000), None),
        (AfterYearDate(2000), None),
        (UNKNOWN_DATE, None),
    ]
)
def test_years_since(date, expected):
    assert date.years_since(2024) == expected


def test_year():
    assert AfterYearDate(1870).year() == 1870
    assert UNKNOWN_DATE.year() is None
    assert UNKNOWN_DATE.is_unknown()
    assert not YearDate(1870).is_unknown()
