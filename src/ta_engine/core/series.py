"""Immutable, index-addressed bar series."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from ta_engine.core.market import Bar
from ta_engine.core.trading import OrderSide
from ta_engine.errors import IndexOutOfRangeError, InvalidArgumentError

if TYPE_CHECKING:  # pragma: no cover
    from ta_engine.core.orders import Trade
    from ta_engine.strategy.base import Strategy


class TimeSeries:
    """Ordered, 0-based sequence of bars.

    Indices are absolute: a sub-series shares its parent's bar storage and
    keeps the parent's index numbers, exposing only its own
    ``[begin_index, end_index]`` window.
    """

    __slots__ = ("_name", "_bars", "_begin", "_end")

    def __init__(self, bars: Iterable[Bar] = (), name: str = "") -> None:
        stored = tuple(bars)
        previous: Bar | None = None
        for position, bar in enumerate(stored):
            if not isinstance(bar, Bar):
                raise InvalidArgumentError(
                    f"Element {position} is not a Bar", argument="bars", value=bar
                )
            if previous is not None and bar.timestamp < previous.timestamp:
                raise InvalidArgumentError(
                    f"Bar {position} is earlier than bar {position - 1}",
                    argument="bars",
                    value=bar.timestamp,
                )
            previous = bar
        self._name = name
        self._bars = stored
        self._begin = 0
        self._end = len(stored) - 1

    @classmethod
    def _view(cls, parent: TimeSeries, begin: int, end: int) -> TimeSeries:
        view = cls.__new__(cls)
        view._name = parent._name
        view._bars = parent._bars
        view._begin = begin
        view._end = end
        return view

    @property
    def name(self) -> str:
        return self._name

    @property
    def begin_index(self) -> int:
        return self._begin

    @property
    def end_index(self) -> int:
        return self._end

    @property
    def size(self) -> int:
        return self._end - self._begin + 1

    @property
    def is_empty(self) -> bool:
        return self.size <= 0

    def check_index(self, index: int) -> int:
        """Return ``index`` or raise when it lies outside this series' window."""
        if not self._begin <= index <= self._end:
            raise IndexOutOfRangeError(index, self._begin, self._end)
        return index

    def bar(self, index: int) -> Bar:
        return self._bars[self.check_index(index)]

    @property
    def first_bar(self) -> Bar:
        return self.bar(self._begin)

    @property
    def last_bar(self) -> Bar:
        return self.bar(self._end)

    def indices(self) -> range:
        return range(self._begin, self._end + 1)

    def sub_series(self, begin: int, end: int) -> TimeSeries:
        """View over ``[begin, end]`` sharing this series' storage."""
        if begin > end:
            raise InvalidArgumentError(
                f"begin ({begin}) must not exceed end ({end})", argument="begin", value=begin
            )
        self.check_index(begin)
        self.check_index(end)
        return TimeSeries._view(self, begin, end)

    def run(self, strategy: Strategy, entry_side: OrderSide = OrderSide.BUY) -> list[Trade]:
        """Backtest ``strategy`` over the whole series."""
        from ta_engine.backtest.runner import run_strategy  # local import to avoid cycles

        return run_strategy(strategy, self, entry_side=entry_side)

    def __len__(self) -> int:
        return max(self.size, 0)

    def __iter__(self) -> Iterator[Bar]:
        for index in self.indices():
            yield self._bars[index]

    def __repr__(self) -> str:
        return f"TimeSeries(name={self._name!r}, begin={self._begin}, end={self._end})"


__all__ = ["TimeSeries"]
