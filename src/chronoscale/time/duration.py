"""Defines the exact fixed-precision :class:`.Duration` and the :class:`.Unit` enumeration.

A :class:`.Duration` never stores floating point seconds. It is a signed count of Julian
centuries paired with an unsigned number of nanoseconds into that century, so sums and
differences are exact across the full representable range:

.. code-block:: python

    one_day = Unit.DAY * 1
    half_ns = Duration.fromUnit(0.5, Unit.NANOSECOND)  # rounds to the nearest nanosecond

    assert (one_day + Unit.SECOND * 3).toUnit(Unit.SECOND) == 86403.0
    assert Duration.MAX + one_day == Duration.MAX  # saturates instead of wrapping

Floating point values only ever appear at the boundary, through :meth:`.Duration.toUnit` and
:meth:`.Duration.fromUnit`.
"""

from __future__ import annotations

# Standard Library Imports
import math
from enum import Enum
from fractions import Fraction
from numbers import Integral, Rational
from typing import TYPE_CHECKING, Union

# Local Imports
from .constants import (
    MAX_CENTURIES,
    MIN_CENTURIES,
    NANOSECONDS_PER_CENTURY,
    NANOSECONDS_PER_DAY,
    NANOSECONDS_PER_HOUR,
    NANOSECONDS_PER_MICROSECOND,
    NANOSECONDS_PER_MILLISECOND,
    NANOSECONDS_PER_MINUTE,
    NANOSECONDS_PER_SECOND,
    NANOSECONDS_PER_WEEK,
)

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from numbers import Real

_MIN_TOTAL: int = MIN_CENTURIES * NANOSECONDS_PER_CENTURY
_MAX_TOTAL: int = MAX_CENTURIES * NANOSECONDS_PER_CENTURY + NANOSECONDS_PER_CENTURY - 1


class Unit(Enum):
    """Named units of elapsed time, valued by their exact length in nanoseconds."""

    CENTURY = NANOSECONDS_PER_CENTURY
    WEEK = NANOSECONDS_PER_WEEK
    DAY = NANOSECONDS_PER_DAY
    HOUR = NANOSECONDS_PER_HOUR
    MINUTE = NANOSECONDS_PER_MINUTE
    SECOND = NANOSECONDS_PER_SECOND
    MILLISECOND = NANOSECONDS_PER_MILLISECOND
    MICROSECOND = NANOSECONDS_PER_MICROSECOND
    NANOSECOND = 1

    @property
    def nanoseconds(self) -> int:
        """``int``: exact length of this unit in nanoseconds."""
        return self.value

    def __mul__(self, value) -> Duration:
        """Return a :class:`.Duration` of `value` of this unit."""
        return Duration.fromUnit(value, self)

    def __rmul__(self, value) -> Duration:
        """Return a :class:`.Duration` of `value` of this unit."""
        return Duration.fromUnit(value, self)


def _exactNanoseconds(value: Real, unit_nanoseconds: int) -> int:
    """Convert `value` units into an integer nanosecond count.

    Integers are exact. Other rationals are converted from their exact value, floats from their
    exact binary value, then rounded half-to-even to the nearest nanosecond.

    Raises:
        ValueError: `value` is NaN.
        OverflowError: `value` is infinite, handled by callers that saturate.
    """
    if isinstance(value, bool):
        return int(value) * unit_nanoseconds
    if isinstance(value, Integral):
        return int(value) * unit_nanoseconds
    if isinstance(value, Rational):
        return round(Fraction(value.numerator, value.denominator) * unit_nanoseconds)

    as_float = float(value)
    if math.isnan(as_float):
        raise ValueError("Duration: cannot represent NaN as a duration.")
    if math.isinf(as_float):
        raise OverflowError(as_float)
    return round(Fraction(as_float) * unit_nanoseconds)


class Duration:
    """Exact, signed, immutable elapsed time.

    Stored as ``centuries`` (signed) and ``nanoseconds`` into that century, where the nanosecond
    part is always normalized into ``[0, NANOSECONDS_PER_CENTURY)``. Results that fall outside of
    ``[Duration.MIN, Duration.MAX]`` saturate to the nearest bound, see :meth:`.isSaturated`.
    """

    __slots__ = ("_centuries", "_nanoseconds")

    MIN: Duration
    """:class:`.Duration`: most negative representable duration, about -3.27 million years."""

    MAX: Duration
    """:class:`.Duration`: most positive representable duration, about 3.27 million years."""

    ZERO: Duration
    """:class:`.Duration`: zero elapsed time."""

    EPSILON: Duration
    """:class:`.Duration`: smallest non-zero duration, exactly one nanosecond."""

    def __init__(self, centuries: int = 0, nanoseconds: int = 0):
        """Build a normalized duration from any pair of centuries & nanoseconds.

        Args:
            centuries (``int``): signed number of Julian centuries
            nanoseconds (``int``): nanoseconds to add, may be negative or exceed one century
        """
        total = int(centuries) * NANOSECONDS_PER_CENTURY + int(nanoseconds)
        total = min(max(total, _MIN_TOTAL), _MAX_TOTAL)
        self._centuries, self._nanoseconds = divmod(total, NANOSECONDS_PER_CENTURY)

    @property
    def centuries(self) -> int:
        """``int``: signed century count, carries the sign of the duration."""
        return self._centuries

    @property
    def nanoseconds(self) -> int:
        """``int``: nanoseconds into :attr:`.centuries`, in ``[0, NANOSECONDS_PER_CENTURY)``."""
        return self._nanoseconds

    @classmethod
    def fromParts(cls, centuries: int, nanoseconds: int) -> Duration:
        """Build a duration from its century & nanosecond parts, normalizing them."""
        return cls(centuries, nanoseconds)

    @classmethod
    def fromTotalNanoseconds(cls, nanoseconds: int) -> Duration:
        """Build a duration from a signed, arbitrarily large nanosecond count."""
        return cls(0, nanoseconds)

    @classmethod
    def fromUnit(cls, value: Real, unit: Unit) -> Duration:
        """Build a duration from a number of `unit`.

        Integer inputs are exact. Floating point inputs are rounded to the nearest nanosecond.
        Infinite inputs saturate to :attr:`.MIN` or :attr:`.MAX`.

        Args:
            value (``int`` | ``float`` | ``Fraction``): number of units
            unit (:class:`.Unit`): unit that `value` is expressed in

        Returns:
            :class:`.Duration`: normalized, possibly saturated, duration

        Raises:
            ValueError: if `value` is NaN
        """
        try:
            return cls(0, _exactNanoseconds(value, unit.nanoseconds))
        except OverflowError:
            return cls.MAX if float(value) > 0 else cls.MIN

    @classmethod
    def fromSeconds(cls, seconds: Real) -> Duration:
        """Build a duration from a number of seconds."""
        return cls.fromUnit(seconds, Unit.SECOND)

    @staticmethod
    def compare(first: Duration, second: Duration) -> int:
        """Return ``-1``, ``0``, or ``1`` as `first` is less than, equal to, or greater than `second`."""
        lhs, rhs = first.totalNanoseconds(), second.totalNanoseconds()
        return (lhs > rhs) - (lhs < rhs)

    def totalNanoseconds(self) -> int:
        """Return the exact, signed number of nanoseconds in this duration."""
        return self._centuries * NANOSECONDS_PER_CENTURY + self._nanoseconds

    def toParts(self) -> tuple[int, int]:
        """Return the exact ``(centuries, nanoseconds)`` pair, for lossless interchange."""
        return self._centuries, self._nanoseconds

    def toUnit(self, unit: Unit) -> float:
        """Return this duration as a floating point number of `unit`.

        Note:
            This is the only lossy view of a duration; the stored value stays exact.
        """
        return self.totalNanoseconds() / unit.nanoseconds

    def toSeconds(self) -> float:
        """Return this duration as floating point seconds."""
        return self.toUnit(Unit.SECOND)

    def isNegative(self) -> bool:
        """Return whether this duration is strictly less than zero."""
        return self._centuries < 0

    def isSaturated(self) -> bool:
        """Return whether this duration is pinned at :attr:`.MIN` or :attr:`.MAX`.

        Arithmetic never raises on overflow; callers that must know whether a result overflowed
        check this instead.
        """
        total = self.totalNanoseconds()
        return total in (_MIN_TOTAL, _MAX_TOTAL)

    def floor(self, step: Duration | Unit) -> Duration:
        """Round down, toward negative infinity, to a whole multiple of `step`.

        A zero `step` returns this duration unchanged. Flooring twice is the same as flooring once.
        """
        size = abs(_asTotal(step))
        if size == 0:
            return self
        return Duration(0, (self.totalNanoseconds() // size) * size)

    def ceil(self, step: Duration | Unit) -> Duration:
        """Round up, toward positive infinity, to a whole multiple of `step`."""
        size = abs(_asTotal(step))
        if size == 0:
            return self
        return Duration(0, -((-self.totalNanoseconds()) // size) * size)

    def round(self, step: Duration | Unit) -> Duration:
        """Round to the nearest whole multiple of `step`, ties going toward positive infinity."""
        size = abs(_asTotal(step))
        if size == 0:
            return self
        return Duration(0, ((2 * self.totalNanoseconds() + size) // (2 * size)) * size)

    def decompose(self) -> tuple[int, int, int, int, int, int, int, int]:
        """Split into ``(sign, days, hours, minutes, seconds, ms, us, ns)``.

        ``sign`` is ``-1`` for negative durations and ``1`` otherwise; the other fields are the
        non-negative components of the magnitude.
        """
        total = self.totalNanoseconds()
        sign = -1 if total < 0 else 1
        days, rem = divmod(abs(total), NANOSECONDS_PER_DAY)
        hours, rem = divmod(rem, NANOSECONDS_PER_HOUR)
        minutes, rem = divmod(rem, NANOSECONDS_PER_MINUTE)
        seconds, rem = divmod(rem, NANOSECONDS_PER_SECOND)
        milliseconds, rem = divmod(rem, NANOSECONDS_PER_MILLISECOND)
        microseconds, nanoseconds = divmod(rem, NANOSECONDS_PER_MICROSECOND)
        return sign, days, hours, minutes, seconds, milliseconds, microseconds, nanoseconds

    def __add__(self, other: Duration | Unit) -> Duration:
        """Exact sum, saturating at the representable bounds."""
        if isinstance(other, (Duration, Unit)):
            return Duration(0, self.totalNanoseconds() + _asTotal(other))
        return NotImplemented

    def __radd__(self, other: Unit) -> Duration:
        """Exact sum, saturating at the representable bounds."""
        return self.__add__(other)

    def __sub__(self, other: Duration | Unit) -> Duration:
        """Exact difference, saturating at the representable bounds."""
        if isinstance(other, (Duration, Unit)):
            return Duration(0, self.totalNanoseconds() - _asTotal(other))
        return NotImplemented

    def __rsub__(self, other: Unit) -> Duration:
        """Exact difference, saturating at the representable bounds."""
        if isinstance(other, Unit):
            return Duration(0, other.nanoseconds - self.totalNanoseconds())
        return NotImplemented

    def __neg__(self) -> Duration:
        """Negate; ``-Duration.MIN`` saturates to :attr:`.MAX`."""
        return Duration(0, -self.totalNanoseconds())

    def __abs__(self) -> Duration:
        """Magnitude; ``abs(Duration.MIN)`` saturates to :attr:`.MAX`."""
        return Duration(0, abs(self.totalNanoseconds()))

    def __mul__(self, scalar: Real) -> Duration:
        """Scale by an integer (exact) or a float (rounded to the nearest nanosecond).

        Multiplying by zero always returns :attr:`.ZERO`.
        """
        if isinstance(scalar, (Duration, Unit)):
            return NotImplemented
        total = self.totalNanoseconds()
        if total == 0 or scalar == 0:
            return Duration.ZERO
        try:
            return Duration(0, _exactNanoseconds(scalar, total))
        except OverflowError:
            return Duration.MAX if (float(scalar) > 0) == (total > 0) else Duration.MIN

    def __rmul__(self, scalar: Real) -> Duration:
        """Scale by an integer (exact) or a float (rounded to the nearest nanosecond)."""
        return self.__mul__(scalar)

    def __truediv__(self, scalar: Real) -> Duration:
        """Divide by a scalar, rounding to the nearest nanosecond.

        Dividing by zero saturates to :attr:`.MAX` or :attr:`.MIN` according to the sign of this
        duration, and a zero duration divided by anything stays :attr:`.ZERO`.
        """
        if isinstance(scalar, (Duration, Unit)):
            return NotImplemented
        total = self.totalNanoseconds()
        if total == 0:
            return Duration.ZERO
        if scalar == 0:
            return Duration.MAX if total > 0 else Duration.MIN

        if isinstance(scalar, Integral):
            return Duration(0, round(Fraction(total, int(scalar))))
        if isinstance(scalar, Rational):
            return Duration(0, round(total / Fraction(scalar.numerator, scalar.denominator)))

        as_float = float(scalar)
        if math.isnan(as_float):
            raise ValueError("Duration: cannot divide a duration by NaN.")
        if math.isinf(as_float):
            return Duration.ZERO
        return Duration(0, round(total / Fraction(as_float)))

    def __eq__(self, other) -> bool:
        """."""
        if not isinstance(other, Duration):
            return NotImplemented
        return self.toParts() == other.toParts()

    def __ne__(self, other) -> bool:
        """."""
        if not isinstance(other, Duration):
            return NotImplemented
        return self.toParts() != other.toParts()

    def __lt__(self, other) -> bool:
        """."""
        if not isinstance(other, Duration):
            return NotImplemented
        return self.toParts() < other.toParts()

    def __le__(self, other) -> bool:
        """."""
        if not isinstance(other, Duration):
            return NotImplemented
        return self.toParts() <= other.toParts()

    def __gt__(self, other) -> bool:
        """."""
        if not isinstance(other, Duration):
            return NotImplemented
        return self.toParts() > other.toParts()

    def __ge__(self, other) -> bool:
        """."""
        if not isinstance(other, Duration):
            return NotImplemented
        return self.toParts() >= other.toParts()

    def __hash__(self):
        """Hash on the exact parts."""
        return hash(self.toParts())

    def __bool__(self) -> bool:
        """A duration is truthy when it is not zero."""
        return self.totalNanoseconds() != 0

    def __str__(self) -> str:
        """Return a string like ``-1 days 2 h 30 min 5 ns``, omitting zero components."""
        sign, *components = self.decompose()
        labels = ("days", "h", "min", "s", "ms", "us", "ns")
        parts = [f"{value} {label}" for value, label in zip(components, labels) if value]
        if not parts:
            return "0 ns"
        text = " ".join(parts)
        return f"-{text}" if sign < 0 else text

    def __repr__(self) -> str:
        """Return a string representation of this :class:`.Duration`."""
        return f"Duration(centuries={self._centuries}, nanoseconds={self._nanoseconds}, {self})"


def _asTotal(value: Duration | Unit) -> int:
    """Return the signed nanosecond count of a duration, or of one `Unit`."""
    if isinstance(value, Unit):
        return value.nanoseconds
    return value.totalNanoseconds()


Duration.MIN = Duration(MIN_CENTURIES, 0)
Duration.MAX = Duration(MAX_CENTURIES, NANOSECONDS_PER_CENTURY - 1)
Duration.ZERO = Duration(0, 0)
Duration.EPSILON = Duration(0, 1)

DurationLike = Union[Duration, Unit]
"""Type alias for values accepted wherever a step :class:`.Duration` is expected."""
