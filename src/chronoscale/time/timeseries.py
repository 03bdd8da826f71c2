"""Defines the :class:`.TimeSeries` class to step through evenly spaced epochs."""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Local Imports
from ..common.logger import chronoscaleLogError
from .duration import Duration, Unit

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterator

    # Local Imports
    from .duration import DurationLike
    from .epoch import Epoch


class TimeSeries:
    """Iterable of epochs from `start` towards `end`, spaced by a fixed `step`.

    Each epoch is computed as ``start + step * index``, so the spacing stays exact no matter
    how long the series is. A series can be iterated any number of times.
    """

    def __init__(self, start: Epoch, end: Epoch, step: DurationLike, inclusive: bool = False):
        """Construct a `TimeSeries` object.

        Args:
            start (:class:`.Epoch`): first epoch of the series
            end (:class:`.Epoch`): epoch the series stops at
            step (:class:`.Duration` | :class:`.Unit`): positive spacing between epochs
            inclusive (``bool``, optional): whether `end` itself is produced when the series
                lands on it. Defaults to ``False``.

        Raises:
            ValueError: if `step` is zero or negative.
        """
        if isinstance(step, Unit):
            step = Duration.fromUnit(1, step)
        if step <= Duration.ZERO:
            msg = f"TimeSeries: step must be positive, got {step}"
            chronoscaleLogError(msg)
            raise ValueError(msg)

        self.start = start
        self.end = end
        self.step = step
        self.include_end = inclusive

    @classmethod
    def exclusive(cls, start: Epoch, end: Epoch, step: DurationLike) -> TimeSeries:
        """Series that stops before `end`."""
        return cls(start, end, step, inclusive=False)

    @classmethod
    def inclusive(cls, start: Epoch, end: Epoch, step: DurationLike) -> TimeSeries:
        """Series that includes `end` when a step lands on it."""
        return cls(start, end, step, inclusive=True)

    def __len__(self) -> int:
        """Return the number of epochs in this series."""
        span = (self.end - self.start).totalNanoseconds()
        size = self.step.totalNanoseconds()
        if span < 0 or (span == 0 and not self.include_end):
            return 0
        if self.include_end:
            return span // size + 1
        return -(-span // size)

    def __iter__(self) -> Iterator[Epoch]:
        """Yield each epoch of the series in order."""
        for index in range(len(self)):
            yield self.start + self.step * index

    def __repr__(self) -> str:
        """Return a string representation of this :class:`.TimeSeries`."""
        bound = "inclusive" if self.include_end else "exclusive"
        return f"TimeSeries(start={self.start!r}, end={self.end!r}, step={self.step}, {bound})"
