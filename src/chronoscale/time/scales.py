"""Conversions between TAI and the other supported time scales.

Every scale is represented by a :class:`.Duration` measured from that scale's own reference
instant, as listed on :class:`.TimeScale`. TAI since J1900 is the canonical form; each scale
converts to and from it:

========= =========================== ===============================================
Scale     Reference                   Relation to TAI
========= =========================== ===============================================
TAI       J1900                       identity
UTC       J1900                       ``TAI - leap seconds``
TT        J1900                       ``TAI + 32.184 s``
ET        J2000                       ``TT``, measured from J2000
TDB       J2000                       ``TT + 1.658 ms * sin(g + 0.0167 sin(g))``
GPS       1980-01-06T00:00:00 UTC     ``TAI - 19 s``, not defined before its epoch
========= =========================== ===============================================

References:
    #. IERS Conventions (2010), Chapter 10
    #. :cite:t:`vallado_2013_astro`, Section 3.5.5
"""

from __future__ import annotations

# Standard Library Imports
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

# Third Party Imports
from numpy import sin

# Local Imports
from ..common.exceptions import UnsupportedScaleForInstant
from ..common.logger import chronoscaleLogError
from .constants import (
    DEG2RAD,
    GPS_EPOCH_SECONDS,
    GPS_TAI_DIFFERENCE_SECONDS,
    J2000_SECONDS,
    TDB_AMPLITUDE_SECONDS,
    TDB_ECCENTRICITY,
    TDB_MEAN_ANOMALY_DEG,
    TDB_MEAN_MOTION_DEG,
    TT_OFFSET_NANOSECONDS,
)
from .duration import Duration, Unit
from .leap_seconds import getLeapSecondTable

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Callable

    # Local Imports
    from .leap_seconds import LeapSecondTable


TT_OFFSET: Duration = Duration.fromTotalNanoseconds(TT_OFFSET_NANOSECONDS)
""":class:`.Duration`: constant TT - TAI offset."""

J2000_TAI: Duration = Unit.SECOND * J2000_SECONDS
""":class:`.Duration`: J2000 as a duration since J1900."""

GPS_EPOCH_TAI: Duration = Unit.SECOND * GPS_EPOCH_SECONDS
""":class:`.Duration`: GPS epoch as a TAI duration since J1900."""


class TimeScale(Enum):
    """Supported time scales."""

    TAI = "TAI"
    """International Atomic Time, the canonical scale."""
    UTC = "UTC"
    """Coordinated Universal Time, TAI stepped by leap seconds."""
    TT = "TT"
    """Terrestrial Time."""
    TDB = "TDB"
    """Barycentric Dynamical Time."""
    ET = "ET"
    """Ephemeris Time, kept as an alias of TT counted from J2000."""
    GPS = "GPS"
    """GPS system time."""

    @classmethod
    def fromString(cls, name: str) -> TimeScale:
        """Return the scale called `name`, ignoring case and surrounding whitespace.

        Raises:
            ValueError: if `name` isn't a supported scale.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            err = f"Unknown time scale: {name!r}"
            raise ValueError(err)  # noqa: B904

    @property
    def reference(self) -> Duration:
        """:class:`.Duration`: civil reading of this scale's reference, counted from J1900."""
        return _CIVIL_REFERENCES[self]


_CIVIL_REFERENCES: dict[TimeScale, Duration] = {
    TimeScale.TAI: Duration.ZERO,
    TimeScale.UTC: Duration.ZERO,
    TimeScale.TT: Duration.ZERO,
    TimeScale.TDB: J2000_TAI,
    TimeScale.ET: J2000_TAI,
    TimeScale.GPS: GPS_EPOCH_TAI - Unit.SECOND * GPS_TAI_DIFFERENCE_SECONDS,
}


class UtcConversion(NamedTuple):
    """Result of converting a TAI instant to UTC."""

    duration: Duration
    """:class:`.Duration`: UTC since J1900. During a leap second this reads as the next day's ``00:00:00``."""

    is_leap_second: bool
    """``bool``: whether the instant lies inside an inserted leap second (``23:59:60``)."""


def taiToUtc(tai: Duration, table: LeapSecondTable | None = None) -> UtcConversion:
    """Convert TAI since J1900 into UTC since J1900.

    Args:
        tai (:class:`.Duration`): TAI since J1900
        table (:class:`.LeapSecondTable`, optional): defaults to the active table

    Returns:
        :class:`.UtcConversion`: UTC duration and whether `tai` is inside a leap second
    """
    if table is None:
        table = getLeapSecondTable()
    utc = tai - Unit.SECOND * table.leapSecondsAt(tai)
    return UtcConversion(utc, table.isLeapSecondInstant(tai))


def utcToTai(utc: Duration, table: LeapSecondTable | None = None, leap_second: bool = False) -> Duration:
    """Convert UTC since J1900 into TAI since J1900.

    The offset is looked up with the UTC reading as a first estimate of the TAI instant, then
    checked once against the TAI instant it produces. A UTC reading repeated by a leap second
    names two TAI instants: the one after the leap second is returned unless `leap_second` is set.

    Args:
        utc (:class:`.Duration`): UTC since J1900
        table (:class:`.LeapSecondTable`, optional): defaults to the active table
        leap_second (``bool``, optional): select the reading inside the leap second. Defaults to
            ``False``.

    Returns:
        :class:`.Duration`: TAI since J1900
    """
    if table is None:
        table = getLeapSecondTable()

    count = table.leapSecondsAt(utc)
    tai = utc + Unit.SECOND * count
    corrected = table.leapSecondsAt(tai)
    if corrected != count:
        tai = utc + Unit.SECOND * corrected

    if not leap_second:
        upcoming = table.entryAfter(tai)
        if upcoming is not None:
            after = utc + Unit.SECOND * upcoming.leap_seconds
            if after >= upcoming.tai_instant:
                tai = after
    return tai


def taiToTt(tai: Duration) -> Duration:
    """Convert TAI since J1900 into TT since J1900."""
    return tai + TT_OFFSET


def ttToTai(tt: Duration) -> Duration:
    """Convert TT since J1900 into TAI since J1900."""
    return tt - TT_OFFSET


def taiToEt(tai: Duration) -> Duration:
    """Convert TAI since J1900 into ET since J2000."""
    return taiToTt(tai) - J2000_TAI


def etToTai(et: Duration) -> Duration:
    """Convert ET since J2000 into TAI since J1900."""
    return ttToTai(et + J2000_TAI)


def tdbMinusTt(centuries_j2000: float) -> Duration:
    """Return the periodic TDB - TT term.

    References:
        :cite:t:`vallado_2013_astro`, Section 3.5.5, Eq. 3-48

    Args:
        centuries_j2000 (``float``): Julian centuries since J2000

    Returns:
        :class:`.Duration`: TDB - TT, never more than 1.66 ms in magnitude
    """
    mean_anomaly = (TDB_MEAN_ANOMALY_DEG + TDB_MEAN_MOTION_DEG * centuries_j2000) * DEG2RAD
    return Duration.fromSeconds(
        float(TDB_AMPLITUDE_SECONDS * sin(mean_anomaly + TDB_ECCENTRICITY * sin(mean_anomaly)))
    )


def taiToTdb(tai: Duration) -> Duration:
    """Convert TAI since J1900 into TDB since J2000."""
    tt = taiToEt(tai)
    return tt + tdbMinusTt(tt.toUnit(Unit.CENTURY))


def tdbToTai(tdb: Duration) -> Duration:
    """Convert TDB since J2000 into TAI since J1900.

    The periodic term is first evaluated at the TDB argument, then once more at the resulting TT.
    """
    tt = tdb - tdbMinusTt(tdb.toUnit(Unit.CENTURY))
    tt = tdb - tdbMinusTt(tt.toUnit(Unit.CENTURY))
    return etToTai(tt)


def taiToGps(tai: Duration) -> Duration:
    """Convert TAI since J1900 into GPS time since the GPS epoch.

    Raises:
        UnsupportedScaleForInstant: if `tai` precedes the GPS epoch.
    """
    gps = tai - GPS_EPOCH_TAI
    if gps.isNegative():
        msg = f"GPS time is not defined {-gps} before the GPS epoch"
        chronoscaleLogError(msg)
        raise UnsupportedScaleForInstant(msg)
    return gps


def gpsToTai(gps: Duration) -> Duration:
    """Convert GPS time since the GPS epoch into TAI since J1900.

    Raises:
        UnsupportedScaleForInstant: if `gps` is negative.
    """
    if gps.isNegative():
        msg = f"GPS time cannot be negative: {gps}"
        chronoscaleLogError(msg)
        raise UnsupportedScaleForInstant(msg)
    return gps + GPS_EPOCH_TAI


_FROM_TAI: dict[TimeScale, Callable[[Duration], Duration]] = {
    TimeScale.TAI: lambda tai: tai,
    TimeScale.TT: taiToTt,
    TimeScale.ET: taiToEt,
    TimeScale.TDB: taiToTdb,
    TimeScale.GPS: taiToGps,
}

_TO_TAI: dict[TimeScale, Callable[[Duration], Duration]] = {
    TimeScale.TAI: lambda tai: tai,
    TimeScale.TT: ttToTai,
    TimeScale.ET: etToTai,
    TimeScale.TDB: tdbToTai,
    TimeScale.GPS: gpsToTai,
}


def taiToScale(tai: Duration, scale: TimeScale, table: LeapSecondTable | None = None) -> Duration:
    """Convert TAI since J1900 into a duration of `scale`, measured from that scale's reference.

    Args:
        tai (:class:`.Duration`): TAI since J1900
        scale (:class:`.TimeScale`): scale to convert into
        table (:class:`.LeapSecondTable`, optional): only used for UTC, defaults to the active table

    Returns:
        :class:`.Duration`: duration of `scale`

    Raises:
        UnsupportedScaleForInstant: if `scale` isn't defined at `tai`.
    """
    if scale is TimeScale.UTC:
        return taiToUtc(tai, table).duration
    return _FROM_TAI[scale](tai)


def scaleToTai(
    duration: Duration,
    scale: TimeScale,
    table: LeapSecondTable | None = None,
    leap_second: bool = False,
) -> Duration:
    """Convert a duration of `scale`, measured from that scale's reference, into TAI since J1900.

    Args:
        duration (:class:`.Duration`): duration of `scale`
        scale (:class:`.TimeScale`): scale `duration` is expressed in
        table (:class:`.LeapSecondTable`, optional): only used for UTC, defaults to the active table
        leap_second (``bool``, optional): only used for UTC, see :func:`.utcToTai`

    Returns:
        :class:`.Duration`: TAI since J1900

    Raises:
        UnsupportedScaleForInstant: if `duration` isn't a valid instant of `scale`.
    """
    if scale is TimeScale.UTC:
        return utcToTai(duration, table, leap_second=leap_second)
    return _TO_TAI[scale](duration)
