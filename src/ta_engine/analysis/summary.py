"""Aggregate figures for one backtest run."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ta_engine.core.num import Num
from ta_engine.core.orders import Trade
from ta_engine.core.series import TimeSeries
from ta_engine.errors import require

from .criteria import (
    AverageProfitCriterion,
    BuyAndHoldCriterion,
    MaximumDrawdownCriterion,
    RewardRiskRatioCriterion,
    TotalProfitCriterion,
    closed_trades,
    equity_curve,
    trade_return,
    trades_context,
)


@dataclass(frozen=True, slots=True)
class BacktestSummary:
    """Aggregate result produced after running a backtest."""

    series_name: str
    total_trades: int
    winning_trades: int
    total_profit: Num
    average_profit: Num
    win_rate: Num
    compounded_return: Num
    best_trade_return: Num
    worst_trade_return: Num
    max_drawdown: Num
    reward_risk_ratio: Num
    buy_and_hold: Num
    equity_curve: tuple[Num, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "series_name": self.series_name,
            "total_trades": self.total_trades,
            "winning_trades": self.winning_trades,
            "total_profit": str(self.total_profit),
            "average_profit": str(self.average_profit),
            "win_rate": str(self.win_rate),
            "compounded_return": str(self.compounded_return),
            "best_trade_return": str(self.best_trade_return),
            "worst_trade_return": str(self.worst_trade_return),
            "max_drawdown": str(self.max_drawdown),
            "reward_risk_ratio": str(self.reward_risk_ratio),
            "buy_and_hold": str(self.buy_and_hold),
            "equity_curve": [str(level) for level in self.equity_curve],
        }


def summarize(series: TimeSeries, trades: Sequence[Trade]) -> BacktestSummary:
    require(series, "series")
    closed = closed_trades(trades)
    total_trades = len(closed)
    returns = [trade_return(trade) for trade in closed]
    wins = sum(1 for value in returns if value.is_positive())
    curve = equity_curve(closed)
    context = trades_context(closed)
    zero = Num(0, context)

    return BacktestSummary(
        series_name=series.name,
        total_trades=total_trades,
        winning_trades=wins,
        total_profit=TotalProfitCriterion().calculate(series, closed),
        average_profit=AverageProfitCriterion().calculate(series, closed),
        win_rate=Num(wins, context) / total_trades if total_trades else zero,
        compounded_return=curve[-1] - 1,
        best_trade_return=max(returns) if returns else zero,
        worst_trade_return=min(returns) if returns else zero,
        max_drawdown=MaximumDrawdownCriterion().calculate(series, closed),
        reward_risk_ratio=RewardRiskRatioCriterion().calculate(series, closed),
        buy_and_hold=BuyAndHoldCriterion().calculate(series, closed),
        equity_curve=tuple(curve),
    )


__all__ = ["BacktestSummary", "summarize"]
