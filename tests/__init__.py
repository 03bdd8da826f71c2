"""Configure importable things that aren't pytest fixtures."""

from __future__ import annotations

# Standard Library Imports
from pathlib import Path

# CHRONOSCALE Imports
from chronoscale.time.duration import Duration, Unit

# Common file paths
FIXTURE_DATA_DIR = Path(__file__).parent / "datafiles"
LEAP_SECONDS_PATH = Path("leap_seconds")

# TAI seconds since J1900 around the 2016-12-31 leap second
TAI_2016_LEAP_START: int = 3_692_217_636
"""``int``: first TAI second read as 2016-12-31T23:59:60 UTC."""
TAI_2017_JAN_01: int = 3_692_217_637
"""``int``: TAI second read as 2017-01-01T00:00:00 UTC."""

# Common reference durations
GPS_EPOCH: Duration = Unit.SECOND * 2_524_953_619
""":class:`.Duration`: GPS epoch as TAI since J1900."""
J2000: Duration = Unit.SECOND * 3_155_716_800
""":class:`.Duration`: J2000 since J1900."""
ONE_NANOSECOND: Duration = Duration.EPSILON
