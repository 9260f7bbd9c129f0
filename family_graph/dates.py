"""
dates.py - Partially known dates for the family graph.

Genealogical dates are often vague: a year, "about" a year, a bound before or
after a year, or a precise day. Unknown dates are represented explicitly and
are never coerced to a concrete date; for ordering they sort after every known
date.

GEDCOM date phrases are converted with ged4py.

Module: family_graph.dates
"""
from __future__ import annotations

__all__ = [
    'Date',
    'UnknownDate',
    'YearDate',
    'AboutYearDate',
    'BeforeYearDate',
    'AfterYearDate',
    'PreciseDate',
    'UNKNOWN_DATE',
    'parse_date',
]

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ged4py.date import DateValue

logger = logging.getLogger(__name__)

MONTH_ABBR_TO_NUM = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}
MONTH_NAMES = ["", "Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

YEAR_RE = re.compile(r'(?<!\d)(\d{3,4})(?!\d)')

# qualifier ranks used to order dates that share a year
_RANK_BEFORE = 0
_RANK_ON = 1
_RANK_AFTER = 2

_UNKNOWN_SORT_KEY = (float('inf'), 0, 0, 0)

SortKey = Tuple[float, int, int, int]


class Date:
    """Base class for all date variants."""

    def is_unknown(self) -> bool:
        return False

    def year(self) -> Optional[int]:
        """The year this date refers to, or None if unknown."""
        raise NotImplementedError

    def sort_key(self) -> SortKey:
        raise NotImplementedError

    def when(self) -> str:
        """Human readable form, e.g. "about 1900"."""
        raise NotImplementedError

    def sorts_before(self, other: 'Date') -> bool:
        """
        Report whether this date sorts strictly before other.

        An unknown date never sorts before anything, and every known date
        sorts before an unknown one.
        """
        if self.is_unknown():
            return False
        if other.is_unknown():
            return True
        return self.sort_key() < other.sort_key()

    def years_since(self, now_year: int) -> Optional[int]:
        """Whole years from this date to now_year, None if the date is only a bound."""
        return None

    def __str__(self) -> str:
        return self.when()


@dataclass(frozen=True)
class UnknownDate(Date):

    def is_unknown(self) -> bool:
        return True

    def year(self) -> Optional[int]:
        return None

    def sort_key(self) -> SortKey:
        return _UNKNOWN_SORT_KEY

    def when(self) -> str:
        return "unknown date"


@dataclass(frozen=True)
class YearDate(Date):
    value: int

    def year(self) -> Optional[int]:
        return self.value

    def sort_key(self) -> SortKey:
        return (self.value, _RANK_ON, 0, 0)

    def when(self) -> str:
        return f"in {self.value}"

    def years_since(self, now_year: int) -> Optional[int]:
        return now_year - self.value


@dataclass(frozen=True)
class AboutYearDate(Date):
    value: int

    def year(self) -> Optional[int]:
        return self.value

    def sort_key(self) -> SortKey:
        return (self.value, _RANK_ON, 0, 0)

    def when(self) -> str:
        return f"about {self.value}"

    def years_since(self, now_year: int) -> Optional[int]:
        return now_year - self.value


@dataclass(frozen=True)
class BeforeYearDate(Date):
    value: int

    def year(self) -> Optional[int]:
        return self.value

    def sort_key(self) -> SortKey:
        return (self.value, _RANK_BEFORE, 0, 0)

    def when(self) -> str:
        return f"before {self.value}"


@dataclass(frozen=True)
class AfterYearDate(Date):
    value: int

    def year(self) -> Optional[int]:
        return self.value

    def sort_key(self) -> SortKey:
        return (self.value, _RANK_AFTER, 0, 0)

    def when(self) -> str:
        return f"after {self.value}"


@dataclass(frozen=True)
class PreciseDate(Date):
    value: int
    month: int
    day: Optional[int] = None

    def year(self) -> Optional[int]:
        return self.value

    def sort_key(self) -> SortKey:
        return (self.value, _RANK_ON, self.month, self.day or 0)

    def when(self) -> str:
        month = MONTH_NAMES[self.month] if 1 <= self.month <= 12 else str(self.month)
        if self.day:
            return f"on {self.day} {month} {self.value}"
        return f"in {month} {self.value}"

    def years_since(self, now_year: int) -> Optional[int]:
        return now_year - self.value


UNKNOWN_DATE = UnknownDate()


def _calendar_date_to_date(cal: Any, wrapper=None) -> Date:
    year = getattr(cal, 'year', None)
    if not isinstance(year, int):
        return UNKNOWN_DATE
    if wrapper is not None:
        return wrapper(year)
    month = getattr(cal, 'month', None)
    month_num = MONTH_ABBR_TO_NUM.get(month.upper()) if isinstance(month, str) else None
    if month_num:
        day = getattr(cal, 'day', None)
        return PreciseDate(year, month_num, day if isinstance(day, int) else None)
    return YearDate(year)


def parse_date(text: Optional[str]) -> Date:
    """
    Convert a GEDCOM style date phrase into a Date.

    "12 MAR 1901" gives a PreciseDate, "1900" a YearDate, "ABT 1900" an
    AboutYearDate, "BEF 1870" a BeforeYearDate and "AFT 1870" an
    AfterYearDate. Ranges and periods collapse to "about" their first year.
    Anything unparseable gives UNKNOWN_DATE.

    Args:
        text (Optional[str]): Date phrase.

    Returns:
        Date: The parsed date.
    """
    if not text or not text.strip():
        return UNKNOWN_DATE
    try:
        value = DateValue.parse(text.strip())
    except (ValueError, TypeError) as e:
        logger.warning(f"Failed to parse date string '{text}': {e}")
        return UNKNOWN_DATE

    kind = value.kind.name
    if kind in ('SIMPLE', 'INTERPRETED'):
        return _calendar_date_to_date(value.date)
    if kind in ('ABOUT', 'CALCULATED', 'ESTIMATED'):
        return _calendar_date_to_date(value.date, AboutYearDate)
    if kind in ('BEFORE', 'TO'):
        return _calendar_date_to_date(value.date, BeforeYearDate)
    if kind in ('AFTER', 'FROM'):
        return _calendar_date_to_date(value.date, AfterYearDate)
    if kind in ('RANGE', 'PERIOD'):
        return _calendar_date_to_date(value.date1, AboutYearDate)

    phrase = getattr(value, 'phrase', None) or text
    match = YEAR_RE.search(phrase)
    if match:
        return AboutYearDate(int(match.group(1)))
    logger.warning(f"Unable to interpret date phrase '{text}'")
    return UNKNOWN_DATE
