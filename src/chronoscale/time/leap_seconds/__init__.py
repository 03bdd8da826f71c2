"""Leap second table package.

The cumulative TAI - UTC offset is a step function of the TAI instant. It is held in an immutable
:class:`.LeapSecondTable`; loading newer data means building a new table and installing it with
:func:`.setLeapSecondTable`, never mutating the table readers already hold.
"""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from typing import TYPE_CHECKING

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from ..duration import Duration


@dataclass(frozen=True)
class LeapSecondEntry:
    """Data class to define a single step of the TAI - UTC offset."""

    tai_instant: Duration
    """:class:`.Duration`: TAI time since J1900 at which :attr:`.leap_seconds` takes effect.

    This is the UTC midnight of the change plus the new offset, i.e. the first TAI instant whose
    UTC reading is the new day.
    """

    leap_seconds: int
    """int: Cumulative TAI - UTC offset from :attr:`.tai_instant` onward (seconds)."""


# Local Imports
# forward-facing API import
from .getter import getLeapSecondTable, resetLeapSecondTable, setLeapSecondTable  # noqa: E402, F401
from .table import BUILTIN_LEAP_SECONDS, LeapSecondTable  # noqa: E402, F401
