"""Indicators that read bar fields directly, plus constants.

These have no lookback: every index of the series has a defined value.
"""

from __future__ import annotations

from ta_engine.core.num import Num, NumLike
from ta_engine.core.series import TimeSeries
from ta_engine.errors import require

from .base import CachedIndicator, Indicator


class ClosePriceIndicator(Indicator[Num]):
    def __init__(self, series: TimeSeries) -> None:
        super().__init__(require(series, "series"))

    def value(self, index: int) -> Num:
        return self._series.bar(index).close


class OpenPriceIndicator(Indicator[Num]):
    def __init__(self, series: TimeSeries) -> None:
        super().__init__(require(series, "series"))

    def value(self, index: int) -> Num:
        return self._series.bar(index).open


class HighPriceIndicator(Indicator[Num]):
    def __init__(self, series: TimeSeries) -> None:
        super().__init__(require(series, "series"))

    def value(self, index: int) -> Num:
        return self._series.bar(index).high


class LowPriceIndicator(Indicator[Num]):
    def __init__(self, series: TimeSeries) -> None:
        super().__init__(require(series, "series"))

    def value(self, index: int) -> Num:
        return self._series.bar(index).low


class VolumeIndicator(Indicator[Num]):
    def __init__(self, series: TimeSeries) -> None:
        super().__init__(require(series, "series"))

    def value(self, index: int) -> Num:
        return self._series.bar(index).volume


class TypicalPriceIndicator(CachedIndicator[Num]):
    """(high + low + close) / 3"""

    def __init__(self, series: TimeSeries) -> None:
        super().__init__(require(series, "series"))

    def _calculate(self, index: int) -> Num:
        bar = self._series.bar(index)
        return (bar.high + bar.low + bar.close) / 3


class ConstantIndicator(Indicator[Num]):
    """Same value at every non-negative index; not bound to any series."""

    def __init__(self, constant: NumLike) -> None:
        super().__init__(None)
        self.constant = Num.of(require(constant, "constant"))

    def value(self, index: int) -> Num:
        self._check_index(index)
        return self.constant

    def __repr__(self) -> str:
        return f"ConstantIndicator({self.constant})"


__all__ = [
    "ClosePriceIndicator",
    "ConstantIndicator",
    "HighPriceIndicator",
    "LowPriceIndicator",
    "OpenPriceIndicator",
    "TypicalPriceIndicator",
    "VolumeIndicator",
]
