"""Indicator base classes and the per-index memoization contract."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ta_engine.core.series import TimeSeries
from ta_engine.errors import InvalidArgumentError

T = TypeVar("T")


class Indicator(ABC, Generic[T]):
    """Function of a bar index over a series (or over other indicators).

    ``lookback`` is the number of preceding indices the indicator needs before
    its value stops depending on how much history is available. Values asked
    for earlier than that are still defined (see each family's docstring).
    """

    lookback: int = 0

    def __init__(self, series: TimeSeries | None) -> None:
        self._series = series

    @property
    def series(self) -> TimeSeries | None:
        return self._series

    @property
    def begin_index(self) -> int:
        return self._series.begin_index if self._series is not None else 0

    def _check_index(self, index: int) -> None:
        if self._series is not None:
            self._series.check_index(index)
        elif index < 0:
            raise InvalidArgumentError("index must not be negative", argument="index", value=index)

    @abstractmethod
    def value(self, index: int) -> T:
        """Value at ``index``; raises IndexOutOfRangeError outside the series."""

    def __getitem__(self, index: int) -> T:
        return self.value(index)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CachedIndicator(Indicator[T]):
    """Indicator whose values are computed once per index and kept for its lifetime.

    The series never changes after construction, so cache entries are
    write-once. First-time population is serialised by a per-instance
    re-entrant lock; reading an already computed index takes no lock.
    """

    def __init__(self, series: TimeSeries | None) -> None:
        super().__init__(series)
        self._cache: dict[int, T] = {}
        self._lock = threading.RLock()

    @abstractmethod
    def _calculate(self, index: int) -> T:
        """Compute the value at ``index``. May only read indices <= ``index``."""

    def value(self, index: int) -> T:
        try:
            return self._cache[index]
        except KeyError:
            pass
        self._check_index(index)
        with self._lock:
            if index not in self._cache:
                self._cache[index] = self._calculate(index)
            return self._cache[index]

    @property
    def cached_count(self) -> int:
        return len(self._cache)


class RecursiveCachedIndicator(CachedIndicator[T]):
    """Cached indicator whose value at ``i`` reads its own value at ``i - 1``.

    A cold request is filled in ascending order from the lowest uncomputed
    index, so each step finds its predecessor already cached. Call depth stays
    constant however far into the series the first request lands.
    """

    def __init__(self, series: TimeSeries | None) -> None:
        super().__init__(series)
        self._next_index = self.begin_index

    def value(self, index: int) -> T:
        try:
            return self._cache[index]
        except KeyError:
            pass
        self._check_index(index)
        with self._lock:
            while self._next_index <= index:
                position = self._next_index
                if position not in self._cache:
                    self._cache[position] = self._calculate(position)
                self._next_index = position + 1
            return self._cache[index]


__all__ = ["CachedIndicator", "Indicator", "RecursiveCachedIndicator"]
