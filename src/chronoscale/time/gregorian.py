"""Exact conversions between civil (proleptic Gregorian) date components and durations.

Components are plain integers; a duration here is the *civil reading* of a clock, counted from
1900-01-01T00:00:00 of the same clock at exactly 86 400 seconds per day. Which physical instant
that reading names depends on the time scale, see :mod:`.scales`.

References:
    #. H. Hinnant, "chrono-Compatible Low-Level Date Algorithms", ``days_from_civil``
    #. :cite:t:`vallado_2013_astro`, Section 3.6
"""

from __future__ import annotations

# Standard Library Imports
from itertools import pairwise
from typing import TYPE_CHECKING

# Local Imports
from .constants import (
    NANOSECONDS_PER_DAY,
    NANOSECONDS_PER_HOUR,
    NANOSECONDS_PER_MINUTE,
    NANOSECONDS_PER_SECOND,
    SECONDS_PER_DAY,
)
from .duration import Duration
from .leap_seconds import getLeapSecondTable

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from .leap_seconds import LeapSecondTable


_DAYS_IN_MONTH: tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_DAYS_PER_ERA: int = 146_097
"""``int``: days in one 400 year Gregorian cycle."""

_J1900_FROM_MARCH_0000: int = 693_901
"""``int``: days from 0000-03-01 to 1900-01-01, aligning the March-based era count with J1900."""

GregorianComponents = tuple[int, int, int, int, int, int, int]
"""Type alias for ``(year, month, day, hour, minute, second, nanoseconds)``."""


def isLeapYear(year: int) -> bool:
    """Return whether `year` has a 29th of February in the proleptic Gregorian calendar."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def daysInMonth(year: int, month: int) -> int:
    """Return the number of days in `month` of `year`.

    Raises:
        ValueError: if `month` isn't in ``[1, 12]``.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    if month == 2 and isLeapYear(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def daysSinceJ1900(year: int, month: int, day: int) -> int:
    """Return the signed number of days from 1900-01-01 to the given date."""
    # Count years from March so that the leap day is the last day of the year
    year -= month <= 2
    era = year // 400
    year_of_era = year - era * 400
    day_of_year = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * _DAYS_PER_ERA + day_of_era - _J1900_FROM_MARCH_0000


def dateFromDaysSinceJ1900(days: int) -> tuple[int, int, int]:
    """Return the ``(year, month, day)`` that is `days` after 1900-01-01."""
    days += _J1900_FROM_MARCH_0000
    era = days // _DAYS_PER_ERA
    day_of_era = days - era * _DAYS_PER_ERA
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    month_index = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * month_index + 2) // 5 + 1
    month = month_index + 3 if month_index < 10 else month_index - 9
    return year_of_era + era * 400 + (month <= 2), month, day


def endsWithLeapSecond(year: int, month: int, day: int, table: LeapSecondTable | None = None) -> bool:
    """Return whether the UTC day ends with an inserted leap second, according to `table`.

    Args:
        year (``int``): civil year
        month (``int``): civil month
        day (``int``): civil day of the month
        table (:class:`.LeapSecondTable`, optional): defaults to the active table

    Returns:
        ``bool``: whether ``23:59:60`` is a valid time of this day
    """
    if table is None:
        table = getLeapSecondTable()

    next_midnight = (daysSinceJ1900(year, month, day) + 1) * SECONDS_PER_DAY
    for previous, entry in pairwise(table):
        if entry.leap_seconds <= previous.leap_seconds:
            continue
        ntp_seconds = entry.tai_instant.totalNanoseconds() // NANOSECONDS_PER_SECOND - entry.leap_seconds
        if ntp_seconds == next_midnight:
            return True
    return False


def isGregorianValid(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    nanos: int = 0,
    table: LeapSecondTable | None = None,
) -> bool:
    """Return whether the components name a real UTC time of day.

    Second ``60`` is only valid at ``23:59`` of a day that ends with an inserted leap second.

    Args:
        year (``int``): civil year, may be zero or negative
        month (``int``): civil month, ``[1, 12]``
        day (``int``): civil day of the month
        hour (``int``, optional): ``[0, 23]``
        minute (``int``, optional): ``[0, 59]``
        second (``int``, optional): ``[0, 59]``, or ``60`` during a leap second
        nanos (``int``, optional): ``[0, 999 999 999]``
        table (:class:`.LeapSecondTable`, optional): defaults to the active table

    Returns:
        ``bool``: whether the components are valid
    """
    if not 1 <= month <= 12:
        return False
    if not 1 <= day <= daysInMonth(year, month):
        return False
    if not (0 <= hour < 24 and 0 <= minute < 60 and 0 <= nanos < NANOSECONDS_PER_SECOND):
        return False
    if 0 <= second < 60:
        return True
    if second == 60 and hour == 23 and minute == 59:
        return endsWithLeapSecond(year, month, day, table=table)
    return False


def gregorianToDuration(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    nanos: int = 0,
) -> Duration:
    """Return the civil reading of the components, counted from 1900-01-01T00:00:00.

    Note:
        Components are not validated here. Second ``60`` reads the same as ``00`` of the next
        day; the leap second itself is selected when the reading is converted from UTC.
    """
    total = (
        daysSinceJ1900(year, month, day) * NANOSECONDS_PER_DAY
        + hour * NANOSECONDS_PER_HOUR
        + minute * NANOSECONDS_PER_MINUTE
        + second * NANOSECONDS_PER_SECOND
        + nanos
    )
    return Duration.fromTotalNanoseconds(total)


def durationToGregorian(duration: Duration) -> GregorianComponents:
    """Split a civil reading back into ``(year, month, day, hour, minute, second, nanos)``.

    This is the exact inverse of :func:`.gregorianToDuration` for seconds in ``[0, 59]``.
    """
    days, rem = divmod(duration.totalNanoseconds(), NANOSECONDS_PER_DAY)
    hour, rem = divmod(rem, NANOSECONDS_PER_HOUR)
    minute, rem = divmod(rem, NANOSECONDS_PER_MINUTE)
    second, nanos = divmod(rem, NANOSECONDS_PER_SECOND)
    year, month, day = dateFromDaysSinceJ1900(days)
    return year, month, day, hour, minute, second, nanos
