import decimal
from datetime import datetime, timedelta, timezone

import numpy as np
import pandas as pd
import pytest

from ta_engine.analysis import TotalProfitCriterion, trade_return
from ta_engine.backtest import run_strategy
from ta_engine.core import Num, NumContext
from ta_engine.data import load_series_csv, series_from_dataframe
from ta_engine.errors import DataError
from ta_engine.indicators import ClosePriceIndicator, EMAIndicator, RSIIndicator, SMAIndicator
from ta_engine.strategy import AlwaysOperateStrategy


def _frame(rows: int = 3) -> pd.DataFrame:
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    timestamps = [start + timedelta(hours=i) for i in range(rows)]
    return pd.DataFrame(
        {
            "timestamp": timestamps,
            "open": [100 + i for i in range(rows)],
            "high": [105 + i for i in range(rows)],
            "low": [95 + i for i in range(rows)],
            "close": [102.5 + i for i in range(rows)],
            "volume": [10 + i for i in range(rows)],
        }
    )


def test_series_from_dataframe() -> None:
    frame = _frame()
    series = series_from_dataframe(frame, name="btc", symbol="BTC-USD")

    assert series.name == "btc"
    assert series.size == 3
    first = series.bar(0)
    assert first.timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert first.open == 100
    assert first.close == Num("102.5")
    assert first.volume == 10
    assert first.symbol == "BTC-USD"


def test_columns_match_case_insensitively() -> None:
    frame = _frame().rename(columns=str.capitalize)
    series = series_from_dataframe(frame)
    assert series.last_bar.close == Num("104.5")


def test_datetime_index_supplies_timestamps() -> None:
    frame = _frame().set_index("timestamp")
    assert isinstance(frame.index, pd.DatetimeIndex)
    series = series_from_dataframe(frame)
    assert series.bar(2).timestamp == datetime(2024, 1, 1, 2, tzinfo=timezone.utc)


def test_numpy_integer_columns() -> None:
    frame = _frame()
    frame["volume"] = np.array([1, 2, 3], dtype=np.int64)
    assert series_from_dataframe(frame).bar(1).volume == 2


def test_missing_column_raises() -> None:
    with pytest.raises(DataError) as exc_info:
        series_from_dataframe(_frame().drop(columns=["volume"]))
    assert "volume" in str(exc_info.value)
    assert exc_info.value.error_code == "DATA_ERROR"


def test_missing_timestamps_raises() -> None:
    with pytest.raises(DataError):
        series_from_dataframe(_frame().drop(columns=["timestamp"]))


def test_nan_price_raises() -> None:
    frame = _frame()
    frame.loc[1, "close"] = float("nan")
    with pytest.raises(DataError):
        series_from_dataframe(frame)


def test_unordered_rows_raise() -> None:
    frame = _frame().iloc[::-1].reset_index(drop=True)
    with pytest.raises(DataError):
        series_from_dataframe(frame)


def test_rejects_non_frames() -> None:
    with pytest.raises(DataError):
        series_from_dataframe([1, 2, 3])  # type: ignore[arg-type]


def test_load_series_csv(tmp_path) -> None:
    path = tmp_path / "candles.csv"
    _frame(4).to_csv(path, index=False)

    series = load_series_csv(path)

    assert series.name == "candles"
    assert series.size == 4
    assert series.bar(3).high == 108


def test_load_series_csv_missing_file(tmp_path) -> None:
    with pytest.raises(DataError) as exc_info:
        load_series_csv(tmp_path / "absent.csv")
    assert exc_info.value.context["source"].endswith("absent.csv")


def test_numpy_float_rows_keep_exact_prices() -> None:
    frame = _frame().set_index("timestamp").astype("float64")
    series = series_from_dataframe(frame)
    assert series.bar(1).close == Num("103.5")
    assert series.bar(2).volume == 12


class TestNumericContext:
    def test_explicit_context(self) -> None:
        context = NumContext(precision=4)
        series = series_from_dataframe(_frame(), context=context)

        bar = series.bar(0)
        assert bar.close.context == context
        assert bar.volume.context == context
        assert str(bar.close / 3) == "34.17"

    def test_configured_context_is_the_default(self, monkeypatch) -> None:
        monkeypatch.setenv("TA_ENGINE_DECIMAL_PRECISION", "4")
        monkeypatch.setenv("TA_ENGINE_ROUNDING", "ROUND_DOWN")

        series = series_from_dataframe(_frame())

        assert series.bar(0).close.context == NumContext(4, decimal.ROUND_DOWN)
        assert str(series.bar(0).close / 3) == "34.16"

    def test_indicators_and_criteria_stay_in_the_series_context(self) -> None:
        context = NumContext(precision=4)
        series = series_from_dataframe(_frame(), context=context)
        close = ClosePriceIndicator(series)

        # (102.5 + 103.5 + 104.5) / 3 fits in four digits
        assert SMAIndicator(close, 3).value(2) == Num("103.5")
        assert SMAIndicator(close, 3).value(2).context == context
        assert EMAIndicator(close, 2).value(2).context == context
        assert RSIIndicator(close, 2).value(2).context == context

        trades = run_strategy(AlwaysOperateStrategy(), series)
        assert TotalProfitCriterion().calculate(series, trades).context == context
        assert str(trade_return(trades[0])) == "0.009756"
