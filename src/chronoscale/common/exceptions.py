"""Contains all the custom-defined exceptions used in chronoscale."""

from __future__ import annotations


class TimeScaleError(Exception):
    """Exception indicating a time scale conversion could not be performed."""


class UnsupportedScaleForInstant(TimeScaleError):  # noqa: N818
    """The requested time scale is not defined at the given instant.

    For example, GPS time is only defined from the GPS epoch (1980-01-06 UTC) onward.
    """


class InvalidGregorianDate(ValueError):  # noqa: N818
    """Exception indicating civil date/time components do not name a real instant."""


class LeapSecondTableError(Exception):
    """Exception indicating leap second data is malformed or improperly ordered."""
