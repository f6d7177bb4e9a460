"""Criteria that score a trade history against its series.

Per-trade returns are ``profit / entry price``; equity compounds them starting
from 1. Open or new trades in a history contribute nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ta_engine.core.num import DEFAULT_CONTEXT, Num, NumContext
from ta_engine.core.orders import Trade
from ta_engine.core.series import TimeSeries
from ta_engine.core.trading import OrderSide
from ta_engine.errors import require


def closed_trades(trades: Sequence[Trade]) -> list[Trade]:
    return [trade for trade in require(trades, "trades") if trade.is_closed]


def trade_return(trade: Trade) -> Num:
    """Fractional return of a closed trade, zero otherwise."""
    profit = trade.profit
    if trade.entry is None:
        return Num.ZERO
    if profit is None or trade.entry.price.is_zero():
        return Num(0, trade.entry.price.context)
    return profit / trade.entry.price


def trades_context(trades: Sequence[Trade]) -> NumContext:
    """Context of the first entry price, or the default one for an empty history."""
    for trade in trades:
        if trade.entry is not None:
            return trade.entry.price.context
    return DEFAULT_CONTEXT


def equity_curve(trades: Sequence[Trade]) -> list[Num]:
    """Compounded equity after each closed trade, starting at 1."""
    closed = closed_trades(trades)
    equity = Num(1, trades_context(closed))
    curve = [equity]
    for trade in closed:
        equity = equity * (1 + trade_return(trade))
        curve.append(equity)
    return curve


class AnalysisCriterion(ABC):
    """Scores a trade history; higher is better unless ``better_than`` says otherwise."""

    @abstractmethod
    def calculate(self, series: TimeSeries, trades: Sequence[Trade]) -> Num:
        """Score of the whole history."""

    def calculate_trade(self, series: TimeSeries, trade: Trade) -> Num:
        return self.calculate(series, [require(trade, "trade")])

    def better_than(self, first: Num, second: Num) -> bool:
        return first > second

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class TotalProfitCriterion(AnalysisCriterion):
    def calculate(self, series: TimeSeries, trades: Sequence[Trade]) -> Num:
        closed = closed_trades(trades)
        total = Num(0, trades_context(closed))
        for trade in closed:
            total = total + trade.profit
        return total


class NumberOfTradesCriterion(AnalysisCriterion):
    """Count of closed trades; fewer is better."""

    def calculate(self, series: TimeSeries, trades: Sequence[Trade]) -> Num:
        closed = closed_trades(trades)
        return Num(len(closed), trades_context(closed))

    def better_than(self, first: Num, second: Num) -> bool:
        return first < second


class AverageProfitCriterion(AnalysisCriterion):
    def calculate(self, series: TimeSeries, trades: Sequence[Trade]) -> Num:
        closed = closed_trades(trades)
        if not closed:
            return Num.ZERO
        return TotalProfitCriterion().calculate(series, closed) / len(closed)


class MaximumDrawdownCriterion(AnalysisCriterion):
    """Largest peak-to-trough fall of the equity curve, as a fraction of the peak.

    Lower is better.
    """

    def calculate(self, series: TimeSeries, trades: Sequence[Trade]) -> Num:
        curve = equity_curve(trades)
        peak = curve[0]
        max_drawdown = Num(0, peak.context)
        for level in curve[1:]:
            if level > peak:
                peak = level
            elif not peak.is_zero():
                drawdown = (peak - level) / peak
                if drawdown > max_drawdown:
                    max_drawdown = drawdown
        return max_drawdown

    def better_than(self, first: Num, second: Num) -> bool:
        return first < second


class RewardRiskRatioCriterion(AnalysisCriterion):
    """Compounded return divided by the maximum drawdown.

    With no drawdown the compounded return itself is returned.
    """

    def calculate(self, series: TimeSeries, trades: Sequence[Trade]) -> Num:
        compounded = equity_curve(trades)[-1] - 1
        drawdown = MaximumDrawdownCriterion().calculate(series, trades)
        if drawdown.is_zero():
            return compounded
        return compounded / drawdown


class BuyAndHoldCriterion(AnalysisCriterion):
    """Ratio of the last close to the first close of the series (1 when empty)."""

    def calculate(self, series: TimeSeries, trades: Sequence[Trade]) -> Num:
        require(series, "series")
        if series.is_empty:
            return Num.ONE
        first_close = series.first_bar.close
        if first_close.is_zero():
            return Num(1, first_close.context)
        return series.last_bar.close / first_close

    def calculate_trade(self, series: TimeSeries, trade: Trade) -> Num:
        """Close at the trade's exit over close at its entry, inverted for shorts."""
        require(series, "series")
        require(trade, "trade")
        if trade.entry is None or trade.exit is None:
            return Num.ONE
        entry_close = series.bar(trade.entry.index).close
        exit_close = series.bar(trade.exit.index).close
        if entry_close.is_zero() or exit_close.is_zero():
            return Num(1, entry_close.context)
        if trade.entry_side is OrderSide.SELL:
            return entry_close / exit_close
        return exit_close / entry_close


__all__ = [
    "AnalysisCriterion",
    "AverageProfitCriterion",
    "BuyAndHoldCriterion",
    "MaximumDrawdownCriterion",
    "NumberOfTradesCriterion",
    "RewardRiskRatioCriterion",
    "TotalProfitCriterion",
    "closed_trades",
    "equity_curve",
    "trade_return",
    "trades_context",
]
