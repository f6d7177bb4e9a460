"""Moving-average trackers.

Under-lookback policy: before ``time_frame`` samples exist, the window shrinks
to the samples available from the series' first index. An SMA at the first
index is therefore the first value itself, and an EMA falls back to that
shrunken SMA until a full window is available.
"""

from __future__ import annotations

from ta_engine.core.num import Num
from ta_engine.errors import require, require_positive

from .base import CachedIndicator, Indicator, RecursiveCachedIndicator


class SMAIndicator(CachedIndicator[Num]):
    """Simple moving average over ``time_frame`` values."""

    def __init__(self, indicator: Indicator[Num], time_frame: int) -> None:
        self._indicator = require(indicator, "indicator")
        super().__init__(indicator.series)
        self.time_frame = require_positive(time_frame, "time_frame")
        self.lookback = indicator.lookback + self.time_frame - 1

    def _calculate(self, index: int) -> Num:
        start = max(self.begin_index, index - self.time_frame + 1)
        total = self._indicator.value(start)
        for i in range(start + 1, index + 1):
            total = total + self._indicator.value(i)
        return total / (index - start + 1)

    def __repr__(self) -> str:
        return f"SMAIndicator(time_frame={self.time_frame})"


class EMAIndicator(RecursiveCachedIndicator[Num]):
    """Exponential moving average, multiplier ``2 / (time_frame + 1)``.

    ``ema(i) = ema(i - 1) + (x(i) - ema(i - 1)) * multiplier``, seeded by the
    SMA until ``time_frame`` samples are available.
    """

    def __init__(self, indicator: Indicator[Num], time_frame: int) -> None:
        self._indicator = require(indicator, "indicator")
        super().__init__(indicator.series)
        self.time_frame = require_positive(time_frame, "time_frame")
        self.lookback = indicator.lookback + self.time_frame - 1
        self._sma = SMAIndicator(indicator, self.time_frame)

    def _calculate(self, index: int) -> Num:
        begin = self.begin_index
        if index - begin + 1 < self.time_frame:
            return self._sma.value(index)
        if index == begin:
            return self._indicator.value(index)
        previous = self.value(index - 1)
        current = self._indicator.value(index)
        multiplier = Num(2, current.context) / (self.time_frame + 1)
        return (current - previous) * multiplier + previous

    def __repr__(self) -> str:
        return f"EMAIndicator(time_frame={self.time_frame})"


class DoubleEMAIndicator(CachedIndicator[Num]):
    """DEMA: ``2 * ema - ema(ema)``."""

    def __init__(self, indicator: Indicator[Num], time_frame: int) -> None:
        require(indicator, "indicator")
        super().__init__(indicator.series)
        self.time_frame = require_positive(time_frame, "time_frame")
        self._ema = EMAIndicator(indicator, self.time_frame)
        self._ema_ema = EMAIndicator(self._ema, self.time_frame)
        self.lookback = self._ema_ema.lookback

    def _calculate(self, index: int) -> Num:
        return self._ema.value(index) * 2 - self._ema_ema.value(index)

    def __repr__(self) -> str:
        return f"DoubleEMAIndicator(time_frame={self.time_frame})"


class TripleEMAIndicator(CachedIndicator[Num]):
    """TEMA: ``3 * ema - 3 * ema(ema) + ema(ema(ema))``."""

    def __init__(self, indicator: Indicator[Num], time_frame: int) -> None:
        require(indicator, "indicator")
        super().__init__(indicator.series)
        self.time_frame = require_positive(time_frame, "time_frame")
        self._ema = EMAIndicator(indicator, self.time_frame)
        self._ema_ema = EMAIndicator(self._ema, self.time_frame)
        self._ema_ema_ema = EMAIndicator(self._ema_ema, self.time_frame)
        self.lookback = self._ema_ema_ema.lookback

    def _calculate(self, index: int) -> Num:
        return (
            self._ema.value(index) * 3
            - self._ema_ema.value(index) * 3
            + self._ema_ema_ema.value(index)
        )

    def __repr__(self) -> str:
        return f"TripleEMAIndicator(time_frame={self.time_frame})"


__all__ = ["DoubleEMAIndicator", "EMAIndicator", "SMAIndicator", "TripleEMAIndicator"]
