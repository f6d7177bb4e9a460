"""Partition a series into contiguous slices for segmented backtests.

Every slice is a :meth:`TimeSeries.sub_series` view: it shares the parent's
bar storage and absolute indices, and exposes only its own bounds. Slices
are ordered, never overlap, and together cover every bar of the series.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from datetime import datetime, timedelta

from ta_engine.core.series import TimeSeries
from ta_engine.errors import IndexOutOfRangeError, InvalidArgumentError, require, require_positive


class TimeSeriesSlicer(ABC):
    """Ordered sequence of slices over one series."""

    def __init__(self, series: TimeSeries) -> None:
        self._series = require(series, "series")
        self._slices: tuple[TimeSeries, ...] | None = None

    @abstractmethod
    def _split(self) -> list[tuple[int, int]]:
        """Return the ``(begin, end)`` index bounds of every slice, in order."""

    @property
    def series(self) -> TimeSeries:
        return self._series

    @property
    def slices(self) -> tuple[TimeSeries, ...]:
        if self._slices is None:
            self._slices = tuple(
                self._series.sub_series(begin, end) for begin, end in self._split()
            )
        return self._slices

    @property
    def number_of_slices(self) -> int:
        return len(self.slices)

    def get_slice(self, position: int) -> TimeSeries:
        slices = self.slices
        if not 0 <= position < len(slices):
            raise IndexOutOfRangeError(position, 0, len(slices) - 1)
        return slices[position]

    def __iter__(self) -> Iterator[TimeSeries]:
        return iter(self.slices)

    def __len__(self) -> int:
        return self.number_of_slices


class FullSeriesSlicer(TimeSeriesSlicer):
    """Pass-through: a single slice spanning the whole series."""

    def _split(self) -> list[tuple[int, int]]:
        if self._series.is_empty:
            return []
        return [(self._series.begin_index, self._series.end_index)]


class CountSlicer(TimeSeriesSlicer):
    """Consecutive slices of ``bars_per_slice`` bars; the last may be shorter."""

    def __init__(self, series: TimeSeries, bars_per_slice: int) -> None:
        super().__init__(series)
        self.bars_per_slice = require_positive(bars_per_slice, "bars_per_slice")

    def _split(self) -> list[tuple[int, int]]:
        bounds = []
        last = self._series.end_index
        for begin in range(self._series.begin_index, last + 1, self.bars_per_slice):
            bounds.append((begin, min(begin + self.bars_per_slice - 1, last)))
        return bounds


class RegularSlicer(TimeSeriesSlicer):
    """Slices aligned on fixed time periods.

    Period ``k`` covers ``[begin_time + k * period, begin_time + (k + 1) * period)``.
    ``begin_time`` defaults to the first bar's timestamp. Bars earlier than
    ``begin_time`` join the first slice; periods without any bar produce no slice.
    """

    def __init__(
        self, series: TimeSeries, period: timedelta, begin_time: datetime | None = None
    ) -> None:
        super().__init__(series)
        require(period, "period")
        if period <= timedelta(0):
            raise InvalidArgumentError("period must be positive", argument="period", value=period)
        self.period = period
        self.begin_time = begin_time

    def _period_number(self, timestamp: datetime, origin: datetime) -> int:
        if timestamp < origin:
            return 0
        return (timestamp - origin) // self.period

    def _split(self) -> list[tuple[int, int]]:
        if self._series.is_empty:
            return []
        origin = self.begin_time or self._series.first_bar.timestamp

        bounds = []
        begin = self._series.begin_index
        current = self._period_number(self._series.bar(begin).timestamp, origin)
        for index in range(begin + 1, self._series.end_index + 1):
            number = self._period_number(self._series.bar(index).timestamp, origin)
            if number != current:
                bounds.append((begin, index - 1))
                begin = index
                current = number
        bounds.append((begin, self._series.end_index))
        return bounds


__all__ = ["CountSlicer", "FullSeriesSlicer", "RegularSlicer", "TimeSeriesSlicer"]
