"""
ta-engine - technical analysis and backtesting toolkit.

Decimal-exact indicators over bar series, composable enter/exit strategies and
a bar-by-bar runner that turns them into trade histories.
"""

from __future__ import annotations

__version__ = "0.1.0"

from ta_engine.core import Bar, Num, Order, OrderSide, TimeSeries, Trade, TradeState
from ta_engine.errors import (
    DataError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidTradeError,
    NumArithmeticError,
    TAError,
)

__all__ = [
    "__version__",
    "Bar",
    "Num",
    "Order",
    "OrderSide",
    "TimeSeries",
    "Trade",
    "TradeState",
    "TAError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "NumArithmeticError",
    "InvalidTradeError",
    "DataError",
]
