"""Ready-made strategy assemblies."""

from __future__ import annotations

from collections.abc import Callable

from ta_engine.core.series import TimeSeries
from ta_engine.errors import InvalidArgumentError, require, require_positive
from ta_engine.indicators import (
    CCIIndicator,
    ClosePriceIndicator,
    ConstantIndicator,
    RSIIndicator,
    SMAIndicator,
)

from .base import Strategy
from .combinators import CombinedBuyAndSellStrategy
from .indicator_rules import (
    IndicatorCrossedIndicatorStrategy,
    IndicatorOverIndicatorStrategy,
    ResistanceStrategy,
    SupportStrategy,
)

StrategyBuilder = Callable[[TimeSeries], Strategy]


def build_rsi2_strategy(series: TimeSeries) -> Strategy:
    """2-period RSI pullbacks traded in the direction of the 200-bar trend.

    Enter when the 5-bar SMA is above the 200-bar SMA, price is below the
    5-bar SMA and RSI(2) is at or below 5. Exit when the trend holds and either
    RSI(2) is at or above 95 or price is above the 5-bar SMA.
    """
    require(series, "series")
    close_price = ClosePriceIndicator(series)
    short_sma = SMAIndicator(close_price, 5)
    long_sma = SMAIndicator(close_price, 200)

    price_below_sma = IndicatorOverIndicatorStrategy(close_price, short_sma)
    short_sma_above_long_sma = IndicatorOverIndicatorStrategy(long_sma, short_sma)

    rsi = RSIIndicator(close_price, 2)
    support = SupportStrategy(rsi, price_below_sma, 5)
    resistance = ResistanceStrategy(rsi, price_below_sma, 95)
    signals = CombinedBuyAndSellStrategy(support, resistance)

    return short_sma_above_long_sma & signals


def build_cci_correction_strategy(series: TimeSeries) -> Strategy:
    """Short-term CCI dips and spikes filtered by the 200-bar CCI trend."""
    require(series, "series")
    long_cci = CCIIndicator(series, 200)
    short_cci = CCIIndicator(series, 5)
    plus_100 = ConstantIndicator(100)
    minus_100 = ConstantIndicator(-100)

    bull_trend = IndicatorOverIndicatorStrategy(plus_100, long_cci)
    bear_trend = IndicatorOverIndicatorStrategy(minus_100, long_cci)
    trend = CombinedBuyAndSellStrategy(bull_trend, bear_trend)

    buy_signal = IndicatorOverIndicatorStrategy(short_cci, minus_100)
    sell_signal = IndicatorOverIndicatorStrategy(short_cci, plus_100)
    signals = CombinedBuyAndSellStrategy(buy_signal, sell_signal)

    return trend & signals


def build_sma_crossover_strategy(
    series: TimeSeries, short_window: int = 5, long_window: int = 20
) -> Strategy:
    """Enter when the short SMA crosses above the long SMA, exit on the reverse."""
    require(series, "series")
    short_window = require_positive(short_window, "short_window")
    long_window = require_positive(long_window, "long_window")
    if short_window >= long_window:
        raise InvalidArgumentError(
            "short_window must be smaller than long_window.",
            argument="short_window",
            value=short_window,
        )
    close_price = ClosePriceIndicator(series)
    short_sma = SMAIndicator(close_price, short_window)
    long_sma = SMAIndicator(close_price, long_window)
    return IndicatorCrossedIndicatorStrategy(long_sma, short_sma)


_BUILDERS: dict[str, StrategyBuilder] = {
    "rsi2": build_rsi2_strategy,
    "rsi-2": build_rsi2_strategy,
    "cci": build_cci_correction_strategy,
    "cci-correction": build_cci_correction_strategy,
    "sma": build_sma_crossover_strategy,
    "sma-crossover": build_sma_crossover_strategy,
    "ma-crossover": build_sma_crossover_strategy,
}


def available_strategies() -> list[str]:
    return sorted(_BUILDERS)


def get_strategy(name: str, series: TimeSeries) -> Strategy:
    """Factory for built-in strategies."""
    require(series, "series")
    normalized = require(name, "name").strip().lower().replace("_", "-")
    builder = _BUILDERS.get(normalized)
    if builder is None:
        raise InvalidArgumentError(f"Unknown strategy: {name}", argument="name", value=name)
    return builder(series)


__all__ = [
    "available_strategies",
    "build_cci_correction_strategy",
    "build_rsi2_strategy",
    "build_sma_crossover_strategy",
    "get_strategy",
]
