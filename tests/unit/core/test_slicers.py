from datetime import timedelta

import pytest

from ta_engine.core import CountSlicer, FullSeriesSlicer, RegularSlicer, TimeSeries
from ta_engine.errors import IndexOutOfRangeError, InvalidArgumentError
from tests.support.builders import START, make_series


def _bounds(slicer) -> list[tuple[int, int]]:
    return [(s.begin_index, s.end_index) for s in slicer]


def test_full_series_slicer() -> None:
    slicer = FullSeriesSlicer(make_series([1, 2, 3]))
    assert _bounds(slicer) == [(0, 2)]
    assert slicer.number_of_slices == 1
    assert len(FullSeriesSlicer(TimeSeries())) == 0


def test_count_slicer_last_slice_may_be_short() -> None:
    slicer = CountSlicer(make_series(range(7)), 3)
    assert _bounds(slicer) == [(0, 2), (3, 5), (6, 6)]


def test_count_slicer_rejects_non_positive_size() -> None:
    with pytest.raises(InvalidArgumentError):
        CountSlicer(make_series([1]), 0)


def test_slices_cover_series_without_overlap() -> None:
    series = make_series(range(11))
    covered = [i for s in CountSlicer(series, 4) for i in s.indices()]
    assert covered == list(series.indices())


def test_regular_slicer_groups_by_period() -> None:
    series = make_series(range(10), step=timedelta(hours=12))
    slicer = RegularSlicer(series, timedelta(days=2))
    assert _bounds(slicer) == [(0, 3), (4, 7), (8, 9)]


def test_regular_slicer_skips_empty_periods() -> None:
    series = make_series(range(4), step=timedelta(days=3))
    slicer = RegularSlicer(series, timedelta(days=1))
    assert _bounds(slicer) == [(0, 0), (1, 1), (2, 2), (3, 3)]


def test_regular_slicer_with_earlier_begin_time() -> None:
    series = make_series(range(4))
    slicer = RegularSlicer(series, timedelta(days=2), begin_time=START - timedelta(days=1))
    assert _bounds(slicer) == [(0, 0), (1, 2), (3, 3)]


def test_regular_slicer_rejects_non_positive_period() -> None:
    with pytest.raises(InvalidArgumentError):
        RegularSlicer(make_series([1]), timedelta(0))


def test_get_slice_out_of_range() -> None:
    slicer = CountSlicer(make_series(range(4)), 2)
    assert slicer.get_slice(1).begin_index == 2
    with pytest.raises(IndexOutOfRangeError):
        slicer.get_slice(2)
    with pytest.raises(IndexOutOfRangeError):
        slicer.get_slice(-1)


def test_none_series_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        FullSeriesSlicer(None)  # type: ignore[arg-type]
