"""Property-based tests for the backtest runner state machine."""

from __future__ import annotations

from hypothesis import given, seed, settings
from hypothesis import strategies as st

from ta_engine.backtest import HistoryRunner, run_strategy
from ta_engine.core import CountSlicer, OrderSide
from tests.property.backtest_invariants_test_helpers import (
    closes_strategy,
    reference_run,
    signal_script,
    spans,
)
from tests.support.builders import ScriptedStrategy, make_series


@seed(7001)
@settings(max_examples=200, deadline=None)
@given(script=signal_script(min_size=1))
def test_trade_history_is_well_formed(script) -> None:
    """Property: trades are closed, ordered and never overlap."""
    enters, exits = script
    series = make_series([1] * len(enters))

    trades = run_strategy(ScriptedStrategy(enters, exits), series)

    previous_exit = -1
    for trade in trades:
        assert trade.is_closed
        assert trade.entry.index < trade.exit.index
        assert trade.entry.index > previous_exit
        assert enters[trade.entry.index]
        assert exits[trade.exit.index]
        previous_exit = trade.exit.index


@seed(7002)
@settings(max_examples=200, deadline=None)
@given(script=signal_script(min_size=1))
def test_matches_reference_state_machine(script) -> None:
    """Property: runner output equals a direct FLAT / IN_TRADE walk of the flags."""
    enters, exits = script
    series = make_series([1] * len(enters))
    trades = run_strategy(ScriptedStrategy(enters, exits), series)
    assert spans(trades) == reference_run(enters, exits)


@seed(7003)
@settings(max_examples=100, deadline=None)
@given(script=signal_script(min_size=1), closes=closes_strategy)
def test_short_profit_mirrors_long_profit(script, closes) -> None:
    """Property: same signals give the same spans with negated profits on the short side."""
    enters, exits = script
    size = min(len(enters), len(closes))
    series = make_series(closes[:size])
    strategy = ScriptedStrategy(enters[:size], exits[:size])

    longs = run_strategy(strategy, series)
    shorts = run_strategy(strategy, series, OrderSide.SELL)

    assert spans(longs) == spans(shorts)
    for long_trade, short_trade in zip(longs, shorts):
        assert long_trade.profit == -short_trade.profit
        assert long_trade.entry.price == series.bar(long_trade.entry.index).close


@seed(7004)
@settings(max_examples=100, deadline=None)
@given(script=signal_script(min_size=1), size=st.integers(min_value=1, max_value=10))
def test_history_runner_keeps_trades_inside_slices(script, size) -> None:
    """Property: each slice is run from flat and no trade crosses a slice boundary."""
    enters, exits = script
    series = make_series([1] * len(enters))
    slicer = CountSlicer(series, size)
    runner = HistoryRunner(slicer, ScriptedStrategy(enters, exits))

    combined = runner.run_all()

    expected = []
    for sub in slicer:
        offset = sub.begin_index
        local = reference_run(
            enters[offset : sub.end_index + 1], exits[offset : sub.end_index + 1]
        )
        expected.extend((entry + offset, exit_ + offset) for entry, exit_ in local)
    assert spans(combined) == expected
