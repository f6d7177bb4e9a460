import pytest

from ta_engine.core import Num
from ta_engine.errors import InvalidArgumentError
from ta_engine.indicators import (
    AverageGainIndicator,
    AverageLossIndicator,
    ClosePriceIndicator,
    ConstantIndicator,
    CrossIndicator,
    HighestValueIndicator,
    LowestValueIndicator,
    MeanDeviationIndicator,
    TypicalPriceIndicator,
)
from tests.support.builders import CountingIndicator, make_ohlc_series, make_series


def test_average_gain_and_loss() -> None:
    close = ClosePriceIndicator(make_series([1, 3, 2, 5]))
    gain = AverageGainIndicator(close, 3)
    loss = AverageLossIndicator(close, 3)

    assert gain.value(0) == 0
    assert loss.value(0) == 0
    assert gain.value(1) == 1
    assert loss.value(2) == Num(1) / 3
    assert gain.value(3) == Num(5) / 3
    assert loss.value(3) == Num(1) / 3


def test_mean_deviation() -> None:
    close = ClosePriceIndicator(make_series([1, 2, 3, 4, 5]))
    deviation = MeanDeviationIndicator(close, 3)
    assert deviation.value(0) == 0
    assert deviation.value(1) == Num("0.5")
    assert float(deviation.value(4)) == pytest.approx(2 / 3)


def test_highest_and_lowest() -> None:
    close = ClosePriceIndicator(make_series([1, 3, 2, 5, 4]))
    highest = HighestValueIndicator(close, 3)
    lowest = LowestValueIndicator(close, 3)
    assert [highest.value(i) for i in range(5)] == [Num(v) for v in (1, 3, 3, 5, 5)]
    assert [lowest.value(i) for i in range(5)] == [Num(v) for v in (1, 1, 1, 2, 2)]


def test_typical_price() -> None:
    series = make_ohlc_series([(1, 4, 1, 1), (2, 6, 0, 3)])
    typical = TypicalPriceIndicator(series)
    assert typical.value(0) == 2
    assert typical.value(1) == 3


class TestCrossIndicator:
    def _cross(self, upper_values, lower_value):
        series = make_series(upper_values)
        upper = CountingIndicator(series, upper_values)
        return CrossIndicator(upper, ConstantIndicator(lower_value))

    def test_detects_cross_below(self) -> None:
        cross = self._cross([5, 5, 3, 2], 4)
        assert [cross.value(i) for i in range(4)] == [False, False, True, False]

    def test_skips_runs_of_equality(self) -> None:
        cross = self._cross([5, 4, 4, 3], 4)
        assert cross.value(3) is True

    def test_touch_from_below_is_not_a_cross(self) -> None:
        cross = self._cross([3, 4, 3], 4)
        assert cross.value(2) is False

    def test_first_index_never_crosses(self) -> None:
        cross = self._cross([1], 4)
        assert cross.value(0) is False

    def test_requires_a_series(self) -> None:
        with pytest.raises(InvalidArgumentError):
            CrossIndicator(ConstantIndicator(1), ConstantIndicator(2))

    def test_takes_series_from_lower_when_upper_is_constant(self) -> None:
        series = make_series([5, 3])
        cross = CrossIndicator(ConstantIndicator(4), ClosePriceIndicator(series))
        assert cross.series is series
        assert cross.value(1) is False


@pytest.mark.parametrize(
    "factory",
    [
        AverageGainIndicator,
        AverageLossIndicator,
        MeanDeviationIndicator,
        HighestValueIndicator,
        LowestValueIndicator,
    ],
)
def test_helpers_reject_bad_arguments(factory) -> None:
    close = ClosePriceIndicator(make_series([1, 2]))
    with pytest.raises(InvalidArgumentError):
        factory(close, 0)
    with pytest.raises(InvalidArgumentError):
        factory(None, 2)
