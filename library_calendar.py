"""
Gregorian date arithmetic used for due dates and fines.

Dates are not validated: a day or month outside its range is not
detected and gives meaningless results.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date


_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True)
class Date:
    """
    Calendar date value.

    Attributes:
        day (int): Day of month, 1-based.
        month (int): Month, 1-12.
        year (int): Year, >= 1.
    """
    day: int
    month: int
    year: int

    @classmethod
    def from_date(cls, d: date) -> Date:
        return cls(day=d.day, month=d.month, year=d.year)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.day:02d}-{self.month:02d}-{self.year:04d}"


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(month: int, year: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_DAYS[month - 1]


def to_serial(d: Date) -> int:
    """
    Returns the day count of `d` where 01-01-0001 is day 1.

    Only used for ordering and subtraction; consistent with add_days.
    """
    y = d.year - 1
    days = y * 365 + y // 4 - y // 100 + y // 400
    for m in range(1, d.month):
        days += days_in_month(m, d.year)
    return days + d.day


def days_between(start: Date, end: Date) -> int:
    """
    Returns the signed number of days from `start` to `end`.
    """
    return to_serial(end) - to_serial(start)


def add_days(d: Date, n: int) -> Date:
    day, month, year = d.day + n, d.month, d.year
    while True:
        dim = days_in_month(month, year)
        if day <= dim:
            break
        day -= dim
        month += 1
        if month > 12:
            month = 1
            year += 1
    return Date(day=day, month=month, year=year)


def today() -> Date:
    return Date.from_date(date.today())
