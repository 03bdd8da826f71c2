"""Defines the :class:`.Epoch` class, a single absolute instant.

An :class:`.Epoch` stores nothing but an exact TAI :class:`.Duration` since J1900. Every other
representation is computed on demand through :mod:`.scales`, so two epochs built from different
scales compare equal exactly when they name the same physical instant:

.. code-block:: python

    leap = Epoch.fromGregorianUtc(2016, 12, 31, 23, 59, 60)
    after = Epoch.fromGregorianUtcAtMidnight(2017, 1, 1)

    assert after - leap == Unit.SECOND * 1
    assert leap.isLeapSecond()
    assert leap.toGregorian() == (2016, 12, 31, 23, 59, 60, 0)

UTC based conversions read the active :class:`.LeapSecondTable` unless a table is passed in.
"""

from __future__ import annotations

# Standard Library Imports
from datetime import datetime, timezone
from time import time_ns
from typing import TYPE_CHECKING

# Local Imports
from ..common.exceptions import InvalidGregorianDate
from ..common.logger import chronoscaleLogError
from .constants import (
    J1900_OFFSET,
    J2000_NAIF,
    MJD_OFFSET,
    NANOSECONDS_PER_MICROSECOND,
    UNIX_EPOCH_SECONDS,
)
from .duration import Duration, Unit
from .gregorian import durationToGregorian, gregorianToDuration, isGregorianValid
from .leap_seconds import getLeapSecondTable
from .scales import TimeScale, scaleToTai, taiToScale, taiToUtc

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from numbers import Real

    # Local Imports
    from .duration import DurationLike
    from .gregorian import GregorianComponents
    from .leap_seconds import LeapSecondTable


UNIX_EPOCH_UTC: Duration = Unit.SECOND * UNIX_EPOCH_SECONDS
""":class:`.Duration`: 1970-01-01T00:00:00 as a UTC duration since J1900."""

MJD_J1900_UTC: Duration = Unit.DAY * J1900_OFFSET
""":class:`.Duration`: J1900 as a Modified Julian Date, in days since the MJD epoch."""

JD_J1900: Duration = Unit.DAY * MJD_OFFSET + MJD_J1900_UTC
""":class:`.Duration`: J1900 as a Julian Date, in days since the Julian Date epoch."""


class Epoch:
    """One absolute instant, held as an exact TAI :class:`.Duration` since J1900."""

    __slots__ = ("_tai",)

    def __init__(self, tai: Duration):
        """Wrap a TAI duration.

        Args:
            tai (:class:`.Duration`): TAI time elapsed since 1900-01-01T00:00:00 TAI
        """
        if not isinstance(tai, Duration):
            raise TypeError(f"Epoch: expected a Duration, got {type(tai)}")
        self._tai = tai

    @property
    def tai(self) -> Duration:
        """:class:`.Duration`: TAI time elapsed since J1900."""
        return self._tai

    # Generic scale interface

    @classmethod
    def fromScale(
        cls,
        duration: Duration,
        scale: TimeScale,
        table: LeapSecondTable | None = None,
        leap_second: bool = False,
    ) -> Epoch:
        """Build an epoch from a duration of `scale`, measured from that scale's reference.

        Args:
            duration (:class:`.Duration`): duration of `scale`
            scale (:class:`.TimeScale`): scale `duration` is expressed in
            table (:class:`.LeapSecondTable`, optional): only used for UTC
            leap_second (``bool``, optional): select the UTC reading inside a leap second

        Raises:
            UnsupportedScaleForInstant: if `duration` isn't a valid instant of `scale`.
        """
        return cls(scaleToTai(duration, scale, table=table, leap_second=leap_second))

    def toScale(self, scale: TimeScale, table: LeapSecondTable | None = None) -> Duration:
        """Return this instant as a duration of `scale`, measured from that scale's reference.

        Raises:
            UnsupportedScaleForInstant: if `scale` isn't defined at this instant.
        """
        return taiToScale(self._tai, scale, table=table)

    # TAI

    @classmethod
    def fromTaiDuration(cls, duration: Duration) -> Epoch:
        """Build an epoch from TAI since J1900."""
        return cls(duration)

    @classmethod
    def fromTaiParts(cls, centuries: int, nanoseconds: int) -> Epoch:
        """Build an epoch from the exact parts of a TAI duration since J1900."""
        return cls(Duration.fromParts(centuries, nanoseconds))

    def toTaiParts(self) -> tuple[int, int]:
        """Return the exact ``(centuries, nanoseconds)`` parts of the TAI duration since J1900."""
        return self._tai.toParts()

    @classmethod
    def fromTaiSeconds(cls, seconds: Real) -> Epoch:
        """Build an epoch from TAI seconds since J1900."""
        return cls(Unit.SECOND * seconds)

    def toTaiSeconds(self) -> float:
        """Return TAI seconds since J1900."""
        return self._tai.toUnit(Unit.SECOND)

    @classmethod
    def fromTaiDays(cls, days: Real) -> Epoch:
        """Build an epoch from TAI days since J1900."""
        return cls(Unit.DAY * days)

    def toTaiDays(self) -> float:
        """Return TAI days since J1900."""
        return self._tai.toUnit(Unit.DAY)

    # UTC

    @classmethod
    def fromUtcSeconds(cls, seconds: Real, table: LeapSecondTable | None = None) -> Epoch:
        """Build an epoch from UTC seconds since J1900."""
        return cls.fromScale(Unit.SECOND * seconds, TimeScale.UTC, table=table)

    def toUtcSeconds(self, table: LeapSecondTable | None = None) -> float:
        """Return UTC seconds since J1900."""
        return self.toScale(TimeScale.UTC, table=table).toUnit(Unit.SECOND)

    @classmethod
    def fromUtcDays(cls, days: Real, table: LeapSecondTable | None = None) -> Epoch:
        """Build an epoch from UTC days since J1900."""
        return cls.fromScale(Unit.DAY * days, TimeScale.UTC, table=table)

    def toUtcDays(self, table: LeapSecondTable | None = None) -> float:
        """Return UTC days since J1900."""
        return self.toScale(TimeScale.UTC, table=table).toUnit(Unit.DAY)

    # Dynamical time scales

    @classmethod
    def fromTtSeconds(cls, seconds: Real) -> Epoch:
        """Build an epoch from TT seconds since J1900."""
        return cls.fromScale(Unit.SECOND * seconds, TimeScale.TT)

    def toTtSeconds(self) -> float:
        """Return TT seconds since J1900."""
        return self.toScale(TimeScale.TT).toUnit(Unit.SECOND)

    @classmethod
    def fromTdbSeconds(cls, seconds: Real) -> Epoch:
        """Build an epoch from TDB seconds since J2000."""
        return cls.fromScale(Unit.SECOND * seconds, TimeScale.TDB)

    def toTdbSeconds(self) -> float:
        """Return TDB seconds since J2000."""
        return self.toScale(TimeScale.TDB).toUnit(Unit.SECOND)

    @classmethod
    def fromEtSeconds(cls, seconds: Real) -> Epoch:
        """Build an epoch from ET seconds since J2000."""
        return cls.fromScale(Unit.SECOND * seconds, TimeScale.ET)

    def toEtSeconds(self) -> float:
        """Return ET seconds since J2000."""
        return self.toScale(TimeScale.ET).toUnit(Unit.SECOND)

    def toTtCenturiesJ2000(self) -> float:
        """Return TT Julian centuries since J2000, the argument of most precession & nutation models."""
        return self.toScale(TimeScale.ET).toUnit(Unit.CENTURY)

    # GPS

    @classmethod
    def fromGpsSeconds(cls, seconds: Real) -> Epoch:
        """Build an epoch from GPS seconds since the GPS epoch.

        Raises:
            UnsupportedScaleForInstant: if `seconds` is negative.
        """
        return cls.fromScale(Unit.SECOND * seconds, TimeScale.GPS)

    @classmethod
    def fromGpsDays(cls, days: Real) -> Epoch:
        """Build an epoch from GPS days since the GPS epoch."""
        return cls.fromScale(Unit.DAY * days, TimeScale.GPS)

    @classmethod
    def fromGpsNanoseconds(cls, nanoseconds: int) -> Epoch:
        """Build an epoch from exact GPS nanoseconds since the GPS epoch."""
        return cls.fromScale(Duration.fromTotalNanoseconds(nanoseconds), TimeScale.GPS)

    def toGpsSeconds(self) -> float:
        """Return GPS seconds since the GPS epoch.

        Raises:
            UnsupportedScaleForInstant: if this instant precedes the GPS epoch.
        """
        return self.toScale(TimeScale.GPS).toUnit(Unit.SECOND)

    def toGpsDays(self) -> float:
        """Return GPS days since the GPS epoch."""
        return self.toScale(TimeScale.GPS).toUnit(Unit.DAY)

    def toGpsNanoseconds(self) -> int:
        """Return exact GPS nanoseconds since the GPS epoch."""
        return self.toScale(TimeScale.GPS).totalNanoseconds()

    # UNIX

    @classmethod
    def fromUnixSeconds(cls, seconds: Real, table: LeapSecondTable | None = None) -> Epoch:
        """Build an epoch from UNIX seconds, i.e. UTC since 1970-01-01 without leap seconds."""
        return cls.fromScale(UNIX_EPOCH_UTC + Unit.SECOND * seconds, TimeScale.UTC, table=table)

    @classmethod
    def fromUnixMilliseconds(cls, milliseconds: Real, table: LeapSecondTable | None = None) -> Epoch:
        """Build an epoch from UNIX milliseconds."""
        return cls.fromScale(UNIX_EPOCH_UTC + Unit.MILLISECOND * milliseconds, TimeScale.UTC, table=table)

    def toUnixSeconds(self, table: LeapSecondTable | None = None) -> float:
        """Return UNIX seconds."""
        return (self.toScale(TimeScale.UTC, table=table) - UNIX_EPOCH_UTC).toUnit(Unit.SECOND)

    def toUnixMilliseconds(self, table: LeapSecondTable | None = None) -> float:
        """Return UNIX milliseconds."""
        return (self.toScale(TimeScale.UTC, table=table) - UNIX_EPOCH_UTC).toUnit(Unit.MILLISECOND)

    @classmethod
    def now(cls, table: LeapSecondTable | None = None) -> Epoch:
        """Return the current instant according to the host clock."""
        return cls.fromScale(UNIX_EPOCH_UTC + Unit.NANOSECOND * time_ns(), TimeScale.UTC, table=table)

    # Julian dates

    @classmethod
    def fromMjdTai(cls, days: Real) -> Epoch:
        """Build an epoch from a TAI Modified Julian Date."""
        return cls(Unit.DAY * days - MJD_J1900_UTC)

    @classmethod
    def fromMjdUtc(cls, days: Real, table: LeapSecondTable | None = None) -> Epoch:
        """Build an epoch from a UTC Modified Julian Date."""
        return cls.fromScale(Unit.DAY * days - MJD_J1900_UTC, TimeScale.UTC, table=table)

    @classmethod
    def fromJdeTai(cls, days: Real) -> Epoch:
        """Build an epoch from a TAI Julian Date."""
        return cls(Unit.DAY * days - JD_J1900)

    @classmethod
    def fromJdeUtc(cls, days: Real, table: LeapSecondTable | None = None) -> Epoch:
        """Build an epoch from a UTC Julian Date."""
        return cls.fromScale(Unit.DAY * days - JD_J1900, TimeScale.UTC, table=table)

    def toMjdTaiDays(self) -> float:
        """Return the TAI Modified Julian Date."""
        return (self._tai + MJD_J1900_UTC).toUnit(Unit.DAY)

    def toMjdUtcDays(self, table: LeapSecondTable | None = None) -> float:
        """Return the UTC Modified Julian Date."""
        return (self.toScale(TimeScale.UTC, table=table) + MJD_J1900_UTC).toUnit(Unit.DAY)

    def toJdeTaiDays(self) -> float:
        """Return the TAI Julian Date."""
        return (self._tai + JD_J1900).toUnit(Unit.DAY)

    def toJdeUtcDays(self, table: LeapSecondTable | None = None) -> float:
        """Return the UTC Julian Date."""
        return (self.toScale(TimeScale.UTC, table=table) + JD_J1900).toUnit(Unit.DAY)

    def toJdeTtDays(self) -> float:
        """Return the TT Julian Date."""
        return (self.toScale(TimeScale.TT) + JD_J1900).toUnit(Unit.DAY)

    def toJdeTdbDays(self) -> float:
        """Return the TDB Julian Date."""
        return self.toScale(TimeScale.TDB).toUnit(Unit.DAY) + J2000_NAIF

    # Leap seconds

    def leapSeconds(self, table: LeapSecondTable | None = None) -> int:
        """Return the TAI - UTC offset in force at this instant, in whole seconds."""
        if table is None:
            table = getLeapSecondTable()
        return table.leapSecondsAt(self._tai)

    def isLeapSecond(self, table: LeapSecondTable | None = None) -> bool:
        """Return whether this instant lies inside an inserted UTC leap second."""
        if table is None:
            table = getLeapSecondTable()
        return table.isLeapSecondInstant(self._tai)

    # Civil components

    @classmethod
    def fromGregorian(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanos: int = 0,
        scale: TimeScale = TimeScale.UTC,
        table: LeapSecondTable | None = None,
    ) -> Epoch:
        """Build an epoch from civil date & time components read on the clock of `scale`.

        Args:
            year (``int``): civil year
            month (``int``): civil month, ``[1, 12]``
            day (``int``): civil day of the month
            hour (``int``, optional): ``[0, 23]``
            minute (``int``, optional): ``[0, 59]``
            second (``int``, optional): ``[0, 59]``, or ``60`` during a UTC leap second
            nanos (``int``, optional): ``[0, 999 999 999]``
            scale (:class:`.TimeScale`, optional): clock the components are read on. Defaults
                to UTC.
            table (:class:`.LeapSecondTable`, optional): only used for UTC

        Returns:
            :class:`.Epoch`: the instant named by the components

        Raises:
            InvalidGregorianDate: if the components don't name a real time of `scale`.
        """
        if scale is TimeScale.UTC:
            if table is None:
                table = getLeapSecondTable()
            valid = isGregorianValid(year, month, day, hour, minute, second, nanos, table=table)
        else:
            valid = second != 60 and isGregorianValid(year, month, day, hour, minute, second, nanos)
        if not valid:
            msg = f"Invalid {scale.value} date: {(year, month, day, hour, minute, second, nanos)}"
            chronoscaleLogError(msg)
            raise InvalidGregorianDate(msg)

        reading = gregorianToDuration(year, month, day, hour, minute, second, nanos)
        return cls.fromScale(reading - scale.reference, scale, table=table, leap_second=second == 60)

    @classmethod
    def fromGregorianTai(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanos: int = 0,
    ) -> Epoch:
        """Build an epoch from TAI date & time components."""
        return cls.fromGregorian(year, month, day, hour, minute, second, nanos, scale=TimeScale.TAI)

    @classmethod
    def fromGregorianUtc(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanos: int = 0,
        table: LeapSecondTable | None = None,
    ) -> Epoch:
        """Build an epoch from UTC date & time components."""
        return cls.fromGregorian(
            year, month, day, hour, minute, second, nanos, scale=TimeScale.UTC, table=table
        )

    @classmethod
    def fromGregorianUtcAtMidnight(cls, year: int, month: int, day: int) -> Epoch:
        """Build an epoch at 00:00:00 UTC of the given date."""
        return cls.fromGregorianUtc(year, month, day)

    @classmethod
    def fromGregorianUtcAtNoon(cls, year: int, month: int, day: int) -> Epoch:
        """Build an epoch at 12:00:00 UTC of the given date."""
        return cls.fromGregorianUtc(year, month, day, 12)

    @classmethod
    def fromDatetime(cls, date_time: datetime, table: LeapSecondTable | None = None) -> Epoch:
        """Build an epoch from a ``datetime``; naive values are taken to be UTC."""
        if date_time.tzinfo is not None:
            date_time = date_time.astimezone(timezone.utc)
        return cls.fromGregorianUtc(
            date_time.year,
            date_time.month,
            date_time.day,
            date_time.hour,
            date_time.minute,
            date_time.second,
            date_time.microsecond * NANOSECONDS_PER_MICROSECOND,
            table=table,
        )

    def toGregorian(
        self,
        scale: TimeScale = TimeScale.UTC,
        table: LeapSecondTable | None = None,
    ) -> GregorianComponents:
        """Return the civil ``(year, month, day, hour, minute, second, nanos)`` read on `scale`.

        Inside a UTC leap second the components read ``23:59:60`` of the day the second is
        appended to.

        Raises:
            UnsupportedScaleForInstant: if `scale` isn't defined at this instant.
        """
        if scale is TimeScale.UTC:
            utc, is_leap_second = taiToUtc(self._tai, table)
            if is_leap_second:
                year, month, day, hour, minute, second, nanos = durationToGregorian(utc - Unit.SECOND)
                return year, month, day, hour, minute, second + 1, nanos
            return durationToGregorian(utc)
        return durationToGregorian(self.toScale(scale) + scale.reference)

    def toDatetime(self, table: LeapSecondTable | None = None) -> datetime:
        """Return an aware UTC ``datetime``, truncated to the microsecond.

        ``datetime`` has no second 60, so a leap second reads as ``23:59:59.999999``.
        """
        year, month, day, hour, minute, second, nanos = self.toGregorian(TimeScale.UTC, table=table)
        microsecond = nanos // NANOSECONDS_PER_MICROSECOND
        if second == 60:
            second, microsecond = 59, 999_999
        return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=timezone.utc)

    # Rounding

    def floor(self, step: DurationLike) -> Epoch:
        """Round the TAI duration down to a multiple of `step`."""
        return Epoch(self._tai.floor(step))

    def ceil(self, step: DurationLike) -> Epoch:
        """Round the TAI duration up to a multiple of `step`."""
        return Epoch(self._tai.ceil(step))

    def round(self, step: DurationLike) -> Epoch:
        """Round the TAI duration to the nearest multiple of `step`."""
        return Epoch(self._tai.round(step))

    # Arithmetic & ordering

    def __add__(self, other: DurationLike) -> Epoch:
        """Shift this instant forward, saturating at the representable bounds."""
        if isinstance(other, (Duration, Unit)):
            return Epoch(self._tai + other)
        return NotImplemented

    def __radd__(self, other: DurationLike) -> Epoch:
        """Shift this instant forward, saturating at the representable bounds."""
        return self.__add__(other)

    def __sub__(self, other):
        """Elapsed TAI duration between two epochs, or an epoch shifted backward."""
        if isinstance(other, Epoch):
            return self._tai - other._tai
        if isinstance(other, (Duration, Unit)):
            return Epoch(self._tai - other)
        return NotImplemented

    def __eq__(self, other) -> bool:
        """."""
        if not isinstance(other, Epoch):
            return NotImplemented
        return self._tai == other._tai

    def __lt__(self, other) -> bool:
        """."""
        if not isinstance(other, Epoch):
            return NotImplemented
        return self._tai < other._tai

    def __le__(self, other) -> bool:
        """."""
        if not isinstance(other, Epoch):
            return NotImplemented
        return self._tai <= other._tai

    def __gt__(self, other) -> bool:
        """."""
        if not isinstance(other, Epoch):
            return NotImplemented
        return self._tai > other._tai

    def __ge__(self, other) -> bool:
        """."""
        if not isinstance(other, Epoch):
            return NotImplemented
        return self._tai >= other._tai

    def __hash__(self):
        """Hash on the exact TAI duration."""
        return hash(self._tai)

    def __repr__(self) -> str:
        """Return a string representation of this :class:`.Epoch`."""
        centuries, nanoseconds = self._tai.toParts()
        return f"Epoch(centuries={centuries}, nanoseconds={nanoseconds}, TAI J1900 + {self._tai})"

