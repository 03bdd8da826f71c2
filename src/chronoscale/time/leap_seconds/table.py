"""Defines the immutable :class:`.LeapSecondTable` and the built-in historical leap seconds."""

from __future__ import annotations

# Standard Library Imports
from bisect import bisect_right
from itertools import pairwise
from typing import TYPE_CHECKING

# Local Imports
from ...common.exceptions import LeapSecondTableError
from ...common.logger import chronoscaleLogError, chronoscaleLogWarningOnce
from ..constants import NANOSECONDS_PER_SECOND
from ..duration import Duration, Unit
from . import LeapSecondEntry

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable, Iterator


BUILTIN_LEAP_SECONDS: tuple[tuple[int, int], ...] = (
    (2_272_060_800, 10),  # 1 Jan 1972
    (2_287_785_600, 11),  # 1 Jul 1972
    (2_303_683_200, 12),  # 1 Jan 1973
    (2_335_219_200, 13),  # 1 Jan 1974
    (2_366_755_200, 14),  # 1 Jan 1975
    (2_398_291_200, 15),  # 1 Jan 1976
    (2_429_913_600, 16),  # 1 Jan 1977
    (2_461_449_600, 17),  # 1 Jan 1978
    (2_492_985_600, 18),  # 1 Jan 1979
    (2_524_521_600, 19),  # 1 Jan 1980
    (2_571_782_400, 20),  # 1 Jul 1981
    (2_603_318_400, 21),  # 1 Jul 1982
    (2_634_854_400, 22),  # 1 Jul 1983
    (2_698_012_800, 23),  # 1 Jul 1985
    (2_776_982_400, 24),  # 1 Jan 1988
    (2_840_140_800, 25),  # 1 Jan 1990
    (2_871_676_800, 26),  # 1 Jan 1991
    (2_918_937_600, 27),  # 1 Jul 1992
    (2_950_473_600, 28),  # 1 Jul 1993
    (2_982_009_600, 29),  # 1 Jul 1994
    (3_029_443_200, 30),  # 1 Jan 1996
    (3_076_704_000, 31),  # 1 Jul 1997
    (3_124_137_600, 32),  # 1 Jan 1999
    (3_345_062_400, 33),  # 1 Jan 2006
    (3_439_756_800, 34),  # 1 Jan 2009
    (3_550_089_600, 35),  # 1 Jul 2012
    (3_644_697_600, 36),  # 1 Jul 2015
    (3_692_217_600, 37),  # 1 Jan 2017
)
"""tuple[tuple[int, int], ...]: ``(NTP seconds, TAI - UTC)`` pairs from the IETF ``leap-seconds.list``.

NTP seconds count UTC days since 1900-01-01T00:00:00 at 86 400 seconds per day, so they are the
UTC reading of the instant at which the new offset applies.
"""


class LeapSecondTable:
    """Immutable, sorted record of the cumulative TAI - UTC offset.

    Queries use a binary search over the TAI instants of the entries. Instants before the first
    entry get zero leap seconds, and instants after the last entry keep the last known count:
    leap seconds that have not been announced yet are never predicted.
    """

    def __init__(self, entries: Iterable[LeapSecondEntry], expires: Duration | None = None):
        """Build and validate a table.

        Args:
            entries (``Iterable``): :class:`.LeapSecondEntry` objects sorted by TAI instant
            expires (:class:`.Duration`, optional): TAI instant past which the publication this
                table was read from is no longer guaranteed complete. Defaults to ``None``.

        Raises:
            LeapSecondTableError: if instants are not strictly increasing, or the cumulative
                counts decrease.
        """
        self._entries: tuple[LeapSecondEntry, ...] = tuple(entries)
        self._expires = expires

        for previous, current in pairwise(self._entries):
            if current.tai_instant <= previous.tai_instant:
                msg = f"Leap second entries out of order: {previous} precedes {current}"
                chronoscaleLogError(msg)
                raise LeapSecondTableError(msg)
            if current.leap_seconds < previous.leap_seconds:
                msg = f"Cumulative leap seconds decrease from {previous} to {current}"
                chronoscaleLogError(msg)
                raise LeapSecondTableError(msg)

        self._instants: tuple[int, ...] = tuple(
            entry.tai_instant.totalNanoseconds() for entry in self._entries
        )

    @classmethod
    def fromNtpSeconds(
        cls,
        rows: Iterable[tuple[int, int]],
        expires_ntp: int | None = None,
    ) -> LeapSecondTable:
        """Build a table from ``(NTP seconds, TAI - UTC)`` rows, as found in ``leap-seconds.list``.

        Args:
            rows (``Iterable``): UTC instant of each change, in NTP seconds, and the new offset
            expires_ntp (``int``, optional): NTP expiration time of the publication

        Returns:
            :class:`.LeapSecondTable`: table keyed on the TAI instant of each change
        """
        entries = [
            LeapSecondEntry(tai_instant=Unit.SECOND * (ntp + count), leap_seconds=count)
            for ntp, count in rows
        ]
        expires = None
        if expires_ntp is not None:
            last_count = entries[-1].leap_seconds if entries else 0
            expires = Unit.SECOND * (expires_ntp + last_count)
        return cls(entries, expires=expires)

    @classmethod
    def builtin(cls) -> LeapSecondTable:
        """Return the table of every leap second announced up to the 2017-01-01 insertion."""
        return _BUILTIN_TABLE

    @property
    def entries(self) -> tuple[LeapSecondEntry, ...]:
        """tuple[LeapSecondEntry, ...]: the entries of this table, sorted by TAI instant."""
        return self._entries

    @property
    def expires(self) -> Duration | None:
        """:class:`.Duration` | ``None``: TAI instant at which the source data expires."""
        return self._expires

    def validityStart(self) -> Duration | None:
        """Return the TAI instant of the first entry, if any."""
        return self._entries[0].tai_instant if self._entries else None

    def lastEntry(self) -> LeapSecondEntry | None:
        """Return the most recent entry, if any."""
        return self._entries[-1] if self._entries else None

    def entryAt(self, tai_instant: Duration) -> LeapSecondEntry | None:
        """Return the entry in force at `tai_instant`, or ``None`` before the first entry."""
        index = bisect_right(self._instants, tai_instant.totalNanoseconds())
        return self._entries[index - 1] if index > 0 else None

    def entryAfter(self, tai_instant: Duration) -> LeapSecondEntry | None:
        """Return the first entry strictly after `tai_instant`, or ``None`` after the last one."""
        index = bisect_right(self._instants, tai_instant.totalNanoseconds())
        return self._entries[index] if index < len(self._entries) else None

    def leapSecondsAt(self, tai_instant: Duration) -> int:
        """Return the cumulative TAI - UTC offset, in whole seconds, at `tai_instant`.

        Note:
            Instants before the first entry return zero, which only approximates UTC before 1972.
            Instants past the last entry hold the last count flat.

        Args:
            tai_instant (:class:`.Duration`): TAI time since J1900

        Returns:
            ``int``: leap seconds in force at `tai_instant`
        """
        entry = self.entryAt(tai_instant)
        if entry is None:
            return 0

        if self.isExpired(tai_instant):
            chronoscaleLogWarningOnce(
                f"leap-seconds-expired:{self._expires.toParts()}",
                f"Leap second data expired at TAI {self._expires}; holding TAI - UTC at "
                f"{self._entries[-1].leap_seconds} s",
            )
        return entry.leap_seconds

    def isLeapSecondInstant(self, tai_instant: Duration) -> bool:
        """Return whether `tai_instant` lies inside an inserted leap second.

        The inserted second(s) are the ones immediately before an entry that raises the offset
        of the entry preceding it. UTC reads these as ``23:59:60``. The first entry of a table
        only marks the start of its validity and inserts nothing.

        Note:
            Instants before the first entry get zero leap seconds, so the offset jumps straight to
            the first entry's count. For the built-in table, TAI 1972-01-01T00:00:00 to 00:00:10
            and 00:00:10 to 00:00:20 read as the same UTC seconds. Neither span is flagged here,
            and converting such a UTC reading back yields the later instant.
        """
        index = bisect_right(self._instants, tai_instant.totalNanoseconds())
        if index == 0 or index >= len(self._entries):
            return False

        step = self._entries[index].leap_seconds - self._entries[index - 1].leap_seconds
        start = self._instants[index] - step * NANOSECONDS_PER_SECOND
        return step > 0 and tai_instant.totalNanoseconds() >= start

    def isExpired(self, tai_instant: Duration) -> bool:
        """Return whether `tai_instant` is past this table's expiration, if it has one."""
        return self._expires is not None and tai_instant >= self._expires

    def withEntry(self, entry: LeapSecondEntry, expires: Duration | None = None) -> LeapSecondTable:
        """Return a new table extended by `entry`; this table is left untouched.

        Args:
            entry (:class:`.LeapSecondEntry`): newly announced entry, after every existing one
            expires (:class:`.Duration`, optional): expiration of the new table. Defaults to
                ``None``, which keeps this table's expiration.

        Raises:
            LeapSecondTableError: if `entry` does not follow the last entry.
        """
        return LeapSecondTable(
            (*self._entries, entry),
            expires=expires if expires is not None else self._expires,
        )

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)

    def __iter__(self) -> Iterator[LeapSecondEntry]:
        """Iterate over the entries in order."""
        return iter(self._entries)

    def __eq__(self, other) -> bool:
        """Tables are equal when their entries and expirations are equal."""
        if not isinstance(other, LeapSecondTable):
            return NotImplemented
        return self._entries == other._entries and self._expires == other._expires

    def __hash__(self):
        """Hash on the entries & expiration."""
        return hash((self._entries, self._expires))

    def __repr__(self) -> str:
        """Return a string representation of this :class:`.LeapSecondTable`."""
        last = self.lastEntry().leap_seconds if self._entries else 0
        return f"LeapSecondTable({len(self)} entries, last TAI - UTC = {last} s, expires={self._expires})"


_BUILTIN_TABLE = LeapSecondTable.fromNtpSeconds(BUILTIN_LEAP_SECONDS)
