"""Building blocks used by oscillators and strategies.

Windowed helpers shrink their window to the samples available from the
series' first index, the same policy as the trackers.
"""

from __future__ import annotations

from ta_engine.core.num import Num
from ta_engine.errors import InvalidArgumentError, require, require_positive

from .base import CachedIndicator, Indicator
from .trackers import SMAIndicator


class _WindowIndicator(CachedIndicator[Num]):
    def __init__(self, indicator: Indicator[Num], time_frame: int) -> None:
        self._indicator = require(indicator, "indicator")
        super().__init__(indicator.series)
        self.time_frame = require_positive(time_frame, "time_frame")
        self.lookback = indicator.lookback + self.time_frame - 1

    def _window(self, index: int) -> range:
        return range(max(self.begin_index, index - self.time_frame + 1), index + 1)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(time_frame={self.time_frame})"


class AverageGainIndicator(_WindowIndicator):
    """Average of the positive index-to-index changes over the window.

    The sum of gains is divided by the number of samples in the window, so the
    first index of the series always averages to zero.
    """

    def _calculate(self, index: int) -> Num:
        begin = self.begin_index
        window = self._window(index)
        total = Num(0, self._indicator.value(index).context)
        for i in range(max(begin + 1, window.start), index + 1):
            change = self._indicator.value(i) - self._indicator.value(i - 1)
            if change.is_positive():
                total = total + change
        return total / len(window)


class AverageLossIndicator(_WindowIndicator):
    """Average of the negative index-to-index changes (as positive numbers)."""

    def _calculate(self, index: int) -> Num:
        begin = self.begin_index
        window = self._window(index)
        total = Num(0, self._indicator.value(index).context)
        for i in range(max(begin + 1, window.start), index + 1):
            change = self._indicator.value(i) - self._indicator.value(i - 1)
            if change.is_negative():
                total = total - change
        return total / len(window)


class MeanDeviationIndicator(_WindowIndicator):
    """Mean absolute deviation from the window's SMA."""

    def __init__(self, indicator: Indicator[Num], time_frame: int) -> None:
        super().__init__(indicator, time_frame)
        self._sma = SMAIndicator(indicator, self.time_frame)

    def _calculate(self, index: int) -> Num:
        average = self._sma.value(index)
        window = self._window(index)
        total = Num(0, average.context)
        for i in window:
            total = total + abs(self._indicator.value(i) - average)
        return total / len(window)


class HighestValueIndicator(_WindowIndicator):
    def _calculate(self, index: int) -> Num:
        return max(self._indicator.value(i) for i in self._window(index))


class LowestValueIndicator(_WindowIndicator):
    def _calculate(self, index: int) -> Num:
        return min(self._indicator.value(i) for i in self._window(index))


class CrossIndicator(CachedIndicator[bool]):
    """True at ``index`` when ``upper`` has just crossed below ``lower``.

    That is: ``upper < lower`` now, and the last preceding index where the two
    differ had ``upper > lower``. Runs of equal values are skipped.
    """

    def __init__(self, upper: Indicator[Num], lower: Indicator[Num]) -> None:
        self._upper = require(upper, "upper")
        self._lower = require(lower, "lower")
        series = upper.series if upper.series is not None else lower.series
        if series is None:
            raise InvalidArgumentError(
                "CrossIndicator needs at least one series-bound indicator", argument="upper"
            )
        super().__init__(series)
        self.lookback = max(upper.lookback, lower.lookback) + 1

    def _calculate(self, index: int) -> bool:
        begin = self.begin_index
        if index == begin or self._upper.value(index) >= self._lower.value(index):
            return False
        i = index - 1
        while i > begin and self._upper.value(i) == self._lower.value(i):
            i -= 1
        return self._upper.value(i) > self._lower.value(i)

    def __repr__(self) -> str:
        return f"CrossIndicator({self._upper!r}, {self._lower!r})"


__all__ = [
    "AverageGainIndicator",
    "AverageLossIndicator",
    "CrossIndicator",
    "HighestValueIndicator",
    "LowestValueIndicator",
    "MeanDeviationIndicator",
]
