"""
Core package for shared value types.

Numbers, bars, series, slicers, orders and trades. It has no dependencies on
indicators, strategies or the runner.
"""

from ta_engine.core.market import Bar
from ta_engine.core.num import DEFAULT_CONTEXT, Num, NumContext
from ta_engine.core.orders import Order, Trade
from ta_engine.core.series import TimeSeries
from ta_engine.core.slicer import CountSlicer, FullSeriesSlicer, RegularSlicer, TimeSeriesSlicer
from ta_engine.core.trading import OrderSide, TradeState

__all__ = [
    # Numbers
    "Num",
    "NumContext",
    "DEFAULT_CONTEXT",
    # Market data
    "Bar",
    "TimeSeries",
    # Slicing
    "TimeSeriesSlicer",
    "FullSeriesSlicer",
    "CountSlicer",
    "RegularSlicer",
    # Trading
    "OrderSide",
    "TradeState",
    "Order",
    "Trade",
]
