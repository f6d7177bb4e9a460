import math

import pytest

from ta_engine.errors import InvalidArgumentError
from ta_engine.strategy import (
    Strategy,
    available_strategies,
    build_cci_correction_strategy,
    build_rsi2_strategy,
    build_sma_crossover_strategy,
    get_strategy,
)
from tests.support.builders import make_ohlc_series, make_series


def _wave(count: int) -> list[str]:
    return [f"{100 + 10 * math.sin(i / 7) + 0.02 * i:.4f}" for i in range(count)]


@pytest.fixture(scope="module")
def wave_series():
    return make_series(_wave(260), name="wave")


@pytest.mark.parametrize(
    "name", ["rsi2", "RSI-2", "cci", "cci_correction", "sma", "ma-crossover", " SMA-Crossover "]
)
def test_get_strategy_resolves_names(wave_series, name) -> None:
    assert isinstance(get_strategy(name, wave_series), Strategy)


def test_get_strategy_unknown_name(wave_series) -> None:
    with pytest.raises(InvalidArgumentError):
        get_strategy("martingale", wave_series)


def test_get_strategy_requires_series() -> None:
    with pytest.raises(InvalidArgumentError):
        get_strategy("rsi2", None)


def test_available_strategies_lists_names() -> None:
    names = available_strategies()
    assert "rsi2" in names and "cci-correction" in names and "sma-crossover" in names
    assert names == sorted(names)


@pytest.mark.parametrize(
    "builder", [build_rsi2_strategy, build_cci_correction_strategy, build_sma_crossover_strategy]
)
def test_builders_reject_none_series(builder) -> None:
    with pytest.raises(InvalidArgumentError):
        builder(None)


def test_sma_crossover_window_validation(wave_series) -> None:
    with pytest.raises(InvalidArgumentError):
        build_sma_crossover_strategy(wave_series, 20, 5)
    with pytest.raises(InvalidArgumentError):
        build_sma_crossover_strategy(wave_series, 0, 5)


def test_sma_crossover_trades_on_a_wave(wave_series) -> None:
    trades = wave_series.run(build_sma_crossover_strategy(wave_series, 3, 12))
    assert trades
    for trade in trades:
        assert trade.is_closed
        assert trade.entry.index < trade.exit.index


def test_rsi2_and_cci_produce_well_formed_histories(wave_series) -> None:
    rows = [(float(c), float(c) + 1, float(c) - 1, float(c)) for c in _wave(260)]
    ohlc = make_ohlc_series(rows)
    rsi_trades = wave_series.run(build_rsi2_strategy(wave_series))
    cci_trades = ohlc.run(build_cci_correction_strategy(ohlc))
    for trades in (rsi_trades, cci_trades):
        previous_exit = -1
        for trade in trades:
            assert trade.is_closed
            assert trade.entry.index > previous_exit
            previous_exit = trade.exit.index
