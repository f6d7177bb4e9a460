"""Bounded and unbounded oscillators."""

from __future__ import annotations

from ta_engine.core.num import Num
from ta_engine.core.series import TimeSeries
from ta_engine.errors import require, require_positive

from .base import CachedIndicator, Indicator
from .helpers import AverageGainIndicator, AverageLossIndicator, MeanDeviationIndicator
from .simple import TypicalPriceIndicator
from .trackers import SMAIndicator

_CCI_FACTOR = Num("0.015")


class RSIIndicator(CachedIndicator[Num]):
    """Relative strength index in ``[0, 100]``.

    ``100 - 100 / (1 + average_gain / average_loss)``; 100 whenever the
    average loss over the window is zero (including the series' first index).
    """

    def __init__(self, indicator: Indicator[Num], time_frame: int) -> None:
        require(indicator, "indicator")
        super().__init__(indicator.series)
        self.time_frame = require_positive(time_frame, "time_frame")
        self._average_gain = AverageGainIndicator(indicator, self.time_frame)
        self._average_loss = AverageLossIndicator(indicator, self.time_frame)
        self.lookback = indicator.lookback + self.time_frame

    def _calculate(self, index: int) -> Num:
        average_loss = self._average_loss.value(index)
        if average_loss.is_zero():
            return Num(100, average_loss.context)
        relative_strength = self._average_gain.value(index) / average_loss
        return 100 - 100 / (1 + relative_strength)

    def __repr__(self) -> str:
        return f"RSIIndicator(time_frame={self.time_frame})"


class CCIIndicator(CachedIndicator[Num]):
    """Commodity channel index over the typical price.

    ``(tp - sma(tp)) / (0.015 * mean_deviation(tp))``; zero when the mean
    deviation is zero (a flat window, including the series' first index).
    """

    def __init__(self, series: TimeSeries, time_frame: int) -> None:
        super().__init__(require(series, "series"))
        self.time_frame = require_positive(time_frame, "time_frame")
        self._typical_price = TypicalPriceIndicator(series)
        self._sma = SMAIndicator(self._typical_price, self.time_frame)
        self._mean_deviation = MeanDeviationIndicator(self._typical_price, self.time_frame)
        self.lookback = self.time_frame - 1

    def _calculate(self, index: int) -> Num:
        mean_deviation = self._mean_deviation.value(index)
        if mean_deviation.is_zero():
            return Num(0, mean_deviation.context)
        typical_price = self._typical_price.value(index)
        return (typical_price - self._sma.value(index)) / (mean_deviation * _CCI_FACTOR)

    def __repr__(self) -> str:
        return f"CCIIndicator(time_frame={self.time_frame})"


__all__ = ["CCIIndicator", "RSIIndicator"]
