"""Strategies driven by indicator comparisons."""

from __future__ import annotations

from ta_engine.core.num import Num, NumLike
from ta_engine.errors import require
from ta_engine.indicators import CrossIndicator, Indicator

from .base import Strategy
from .combinators import _require_strategy


class IndicatorOverIndicatorStrategy(Strategy):
    """Enters while ``first`` is below ``second``, exits while it is above.

    Equal values trigger neither rule.
    """

    def __init__(self, first: Indicator[Num], second: Indicator[Num]) -> None:
        self.first = require(first, "first")
        self.second = require(second, "second")

    def should_enter(self, index: int) -> bool:
        return self.first.value(index) < self.second.value(index)

    def should_exit(self, index: int) -> bool:
        return self.first.value(index) > self.second.value(index)

    def __repr__(self) -> str:
        return f"IndicatorOverIndicatorStrategy({self.first!r}, {self.second!r})"


class IndicatorCrossedIndicatorStrategy(Strategy):
    """Enters when ``upper`` crosses below ``lower``, exits on the reverse cross."""

    def __init__(self, upper: Indicator[Num], lower: Indicator[Num]) -> None:
        self.upper = require(upper, "upper")
        self.lower = require(lower, "lower")
        self._cross_down = CrossIndicator(upper, lower)
        self._cross_up = CrossIndicator(lower, upper)

    def should_enter(self, index: int) -> bool:
        return self._cross_down.value(index)

    def should_exit(self, index: int) -> bool:
        return self._cross_up.value(index)

    def __repr__(self) -> str:
        return f"IndicatorCrossedIndicatorStrategy({self.upper!r}, {self.lower!r})"


class SupportStrategy(Strategy):
    """Gates the entries of ``strategy`` on ``indicator`` being at or below ``support``."""

    def __init__(self, indicator: Indicator[Num], strategy: Strategy, support: NumLike) -> None:
        self.indicator = require(indicator, "indicator")
        self.strategy = _require_strategy(strategy, "strategy")
        self.support = Num.of(require(support, "support"))

    def should_enter(self, index: int) -> bool:
        return self.indicator.value(index) <= self.support and self.strategy.should_enter(index)

    def should_exit(self, index: int) -> bool:
        return self.strategy.should_exit(index)

    def __repr__(self) -> str:
        return f"SupportStrategy({self.indicator!r}, {self.strategy!r}, support={self.support})"


class ResistanceStrategy(Strategy):
    """Exits once ``indicator`` reaches ``resistance``; otherwise defers to ``strategy``."""

    def __init__(
        self, indicator: Indicator[Num], strategy: Strategy, resistance: NumLike
    ) -> None:
        self.indicator = require(indicator, "indicator")
        self.strategy = _require_strategy(strategy, "strategy")
        self.resistance = Num.of(require(resistance, "resistance"))

    def should_enter(self, index: int) -> bool:
        return self.strategy.should_enter(index)

    def should_exit(self, index: int) -> bool:
        return self.indicator.value(index) >= self.resistance or self.strategy.should_exit(index)

    def __repr__(self) -> str:
        return (
            f"ResistanceStrategy({self.indicator!r}, {self.strategy!r}, "
            f"resistance={self.resistance})"
        )


__all__ = [
    "IndicatorCrossedIndicatorStrategy",
    "IndicatorOverIndicatorStrategy",
    "ResistanceStrategy",
    "SupportStrategy",
]
