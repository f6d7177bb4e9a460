"""Deterministic backtest runner built around index-driven strategies."""

from __future__ import annotations

from typing import Protocol

from ta_engine.core.orders import Trade
from ta_engine.core.series import TimeSeries
from ta_engine.core.slicer import TimeSeriesSlicer
from ta_engine.core.trading import OrderSide
from ta_engine.errors import InvalidArgumentError, require
from ta_engine.logging.correlation import run_context
from ta_engine.strategy.base import Strategy
from ta_engine.utilities.logging_patterns import get_logger, log_operation, log_trade_event

logger = get_logger(__name__, component="backtest")


def _require_side(entry_side: OrderSide) -> OrderSide:
    if not isinstance(entry_side, OrderSide):
        raise InvalidArgumentError(
            "entry_side must be an OrderSide", argument="entry_side", value=entry_side
        )
    return entry_side


def run_strategy(
    strategy: Strategy, series: TimeSeries, entry_side: OrderSide = OrderSide.BUY
) -> list[Trade]:
    """Walk ``series`` once and return the closed trades ``strategy`` produces.

    At most one trade is open at a time. An entry is never followed by an exit
    on the same bar, and a trade still open after the last bar is dropped.
    Orders are filled at the bar's close.
    """
    require(strategy, "strategy")
    require(series, "series")
    entry_side = _require_side(entry_side)

    trades: list[Trade] = []
    trade = Trade(entry_side)

    with log_operation(
        "run_strategy",
        logger=logger,
        strategy=repr(strategy),
        series=series.name,
        begin=series.begin_index,
        end=series.end_index,
        entry_side=entry_side.value,
    ):
        for index in series.indices():
            if not strategy.should_operate(index, trade):
                continue
            order = trade.operate(index, series.bar(index).close)
            if trade.is_closed:
                log_trade_event(
                    "Trade closed",
                    logger=logger,
                    index=index,
                    price=str(order.price),
                    profit=str(trade.profit),
                )
                trades.append(trade)
                trade = Trade(entry_side)
            else:
                log_trade_event(
                    "Trade opened",
                    logger=logger,
                    index=index,
                    side=order.side.value,
                    price=str(order.price),
                )
        if trade.is_opened:
            logger.debug(
                "Discarding trade still open at end of range",
                entry_index=trade.entry.index if trade.entry is not None else None,
            )
    return trades


class Runner(Protocol):
    """Produces the trade history of a strategy over the slices of a series."""

    def run(self, slice_index: int) -> list[Trade]: ...

    def run_all(self) -> list[Trade]: ...


class RunnerFactory(Protocol):
    def create(self, strategy: Strategy, slicer: TimeSeriesSlicer) -> Runner: ...


class HistoryRunner:
    """Runs one strategy over each slice independently, caching per slice.

    Every slice starts flat; trades never span slice boundaries.
    """

    def __init__(
        self,
        slicer: TimeSeriesSlicer,
        strategy: Strategy,
        entry_side: OrderSide = OrderSide.BUY,
    ) -> None:
        self._slicer = require(slicer, "slicer")
        self._strategy = require(strategy, "strategy")
        self._entry_side = _require_side(entry_side)
        self._results: dict[int, list[Trade]] = {}

    @property
    def slicer(self) -> TimeSeriesSlicer:
        return self._slicer

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    def run(self, slice_index: int) -> list[Trade]:
        cached = self._results.get(slice_index)
        if cached is not None:
            return list(cached)
        sub_series = self._slicer.get_slice(slice_index)
        with run_context(slice=slice_index):
            trades = run_strategy(self._strategy, sub_series, self._entry_side)
        self._results[slice_index] = trades
        return list(trades)

    def run_all(self) -> list[Trade]:
        trades: list[Trade] = []
        with run_context(strategy=repr(self._strategy)):
            for slice_index in range(self._slicer.number_of_slices):
                trades.extend(self.run(slice_index))
        return trades

    def __repr__(self) -> str:
        return (
            f"HistoryRunner(strategy={self._strategy!r}, "
            f"slices={self._slicer.number_of_slices}, entry_side={self._entry_side.value})"
        )


class HistoryRunnerFactory:
    def __init__(self, entry_side: OrderSide = OrderSide.BUY) -> None:
        self._entry_side = _require_side(entry_side)

    def create(self, strategy: Strategy, slicer: TimeSeriesSlicer) -> HistoryRunner:
        return HistoryRunner(slicer, strategy, self._entry_side)


__all__ = ["HistoryRunner", "HistoryRunnerFactory", "Runner", "RunnerFactory", "run_strategy"]
