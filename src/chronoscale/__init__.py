"""Main Module Documentation.

Precision time representation and time scale conversion. Instants are exact TAI durations,
converted on demand to UTC, TT, TDB, ET, and GPS time.

.. code-block:: python

    from chronoscale import Epoch, TimeScale, Unit

    epoch = Epoch.fromGregorianUtc(2017, 1, 1)
    assert epoch.leapSeconds() == 37
    assert (epoch + Unit.DAY * 1).toGregorian(TimeScale.UTC) == (2017, 1, 2, 0, 0, 0, 0)
"""

from __future__ import annotations

__version__ = "1.0.0"

# Local Imports
# forward-facing API import
from .time.duration import Duration, Unit  # noqa: E402, F401
from .time.epoch import Epoch  # noqa: E402, F401
from .time.leap_seconds import LeapSecondTable  # noqa: E402, F401
from .time.scales import TimeScale  # noqa: E402, F401
from .time.timeseries import TimeSeries  # noqa: E402, F401
