"""Global time constants.

This module holds all constants shared by the duration, leap second, time scale, and epoch
modules, allowing for a consistent place to store them. Reference epochs are expressed as whole
seconds (or nanoseconds) elapsed since the J1900 reference, 1900-01-01T00:00:00.

References:
    #. IERS Conventions (2010), Chapter 10
    #. NAIF SPICE Required Reading, "Time"
    #. :cite:t:`vallado_2013_astro`, Section 3.5
"""

from __future__ import annotations

# Third Party Imports
from numpy import pi

# Unit lengths, in nanoseconds
NANOSECONDS_PER_MICROSECOND: int = 1_000
NANOSECONDS_PER_MILLISECOND: int = 1_000 * NANOSECONDS_PER_MICROSECOND
NANOSECONDS_PER_SECOND: int = 1_000 * NANOSECONDS_PER_MILLISECOND
NANOSECONDS_PER_MINUTE: int = 60 * NANOSECONDS_PER_SECOND
NANOSECONDS_PER_HOUR: int = 60 * NANOSECONDS_PER_MINUTE
NANOSECONDS_PER_DAY: int = 24 * NANOSECONDS_PER_HOUR
NANOSECONDS_PER_WEEK: int = 7 * NANOSECONDS_PER_DAY

# Calendar constants
SECONDS_PER_MINUTE: int = 60
SECONDS_PER_HOUR: int = 3_600
SECONDS_PER_DAY: int = 86_400
DAYS_PER_YEAR: float = 365.25
DAYS_PER_CENTURY: int = 36_525
SECONDS_PER_YEAR: int = 31_557_600
"""``int``: seconds per Julian year, as defined by NAIF SPICE ``jyear_c``."""
SECONDS_PER_CENTURY: int = SECONDS_PER_DAY * DAYS_PER_CENTURY
NANOSECONDS_PER_CENTURY: int = DAYS_PER_CENTURY * NANOSECONDS_PER_DAY
"""``int``: length of the coarse unit of :class:`.Duration`, exactly 3 155 760 000 000 000 000."""

# Representable range of :class:`.Duration`
MIN_CENTURIES: int = -(2**15)
MAX_CENTURIES: int = 2**15 - 1

# Julian dates
J1900_NAIF: float = 2_415_020.0
J2000_NAIF: float = 2_451_545.0
MJD_OFFSET: float = 2_400_000.5
"""``float``: Julian date of the Modified Julian Date epoch, 1858-11-17T00:00:00."""
J1900_OFFSET: int = 15_020
"""``int``: days between the MJD epoch and 1900-01-01T00:00:00."""
J2000_OFFSET: float = 51_544.5
"""``float``: days between the MJD epoch and 2000-01-01T12:00:00."""

# Reference epochs, in seconds since J1900
J2000_SECONDS: int = 3_155_716_800
"""``int``: J2000 (2000-01-01T12:00:00) as seconds since J1900, the TDB & ET reference."""
UNIX_EPOCH_SECONDS: int = 2_208_988_800
"""``int``: 1970-01-01T00:00:00 as seconds since J1900, the UNIX reference (UTC)."""
GPS_TAI_DIFFERENCE_SECONDS: int = 19
"""``int``: constant TAI - GPS time offset."""
GPS_EPOCH_SECONDS: int = 80 * SECONDS_PER_YEAR + 4 * SECONDS_PER_DAY + GPS_TAI_DIFFERENCE_SECONDS
"""``int``: GPS epoch (1980-01-06T00:00:00 UTC) as TAI seconds since J1900."""

# Terrestrial & barycentric time
TT_OFFSET_NANOSECONDS: int = 32_184 * NANOSECONDS_PER_MILLISECOND
"""``int``: constant TT - TAI offset, 32.184 seconds."""
TDB_AMPLITUDE_SECONDS: float = 0.001_658
"""``float``: amplitude of the periodic TDB - TT term."""
TDB_ECCENTRICITY: float = 0.0167
"""``float``: Earth orbit eccentricity used in the periodic TDB - TT term."""
TDB_MEAN_ANOMALY_DEG: float = 357.528
"""``float``: Earth mean anomaly at J2000, degrees."""
TDB_MEAN_MOTION_DEG: float = 35_999.050
"""``float``: Earth mean anomaly rate, degrees per Julian century."""

# Angle conversions
DEG2RAD: float = pi / 180.0
