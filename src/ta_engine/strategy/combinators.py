"""Strategies built from other strategies."""

from __future__ import annotations

from ta_engine.errors import InvalidArgumentError

from .base import Strategy


def _require_strategy(value: object, argument: str) -> Strategy:
    if value is None:
        raise InvalidArgumentError(f"{argument} must not be None", argument=argument)
    if not isinstance(value, Strategy):
        raise InvalidArgumentError(
            f"{argument} must be a Strategy, got {type(value).__name__}",
            argument=argument,
            value=value,
        )
    return value


class AndStrategy(Strategy):
    """Enters (exits) only when both children enter (exit)."""

    def __init__(self, first: Strategy, second: Strategy) -> None:
        self.first = _require_strategy(first, "first")
        self.second = _require_strategy(second, "second")

    def should_enter(self, index: int) -> bool:
        return self.first.should_enter(index) and self.second.should_enter(index)

    def should_exit(self, index: int) -> bool:
        return self.first.should_exit(index) and self.second.should_exit(index)

    def __repr__(self) -> str:
        return f"({self.first!r} & {self.second!r})"


class OrStrategy(Strategy):
    """Enters (exits) when either child enters (exits)."""

    def __init__(self, first: Strategy, second: Strategy) -> None:
        self.first = _require_strategy(first, "first")
        self.second = _require_strategy(second, "second")

    def should_enter(self, index: int) -> bool:
        return self.first.should_enter(index) or self.second.should_enter(index)

    def should_exit(self, index: int) -> bool:
        return self.first.should_exit(index) or self.second.should_exit(index)

    def __repr__(self) -> str:
        return f"({self.first!r} | {self.second!r})"


class OppositeStrategy(Strategy):
    """Swaps the enter and exit rules of the wrapped strategy."""

    def __init__(self, strategy: Strategy) -> None:
        self.strategy = _require_strategy(strategy, "strategy")

    def should_enter(self, index: int) -> bool:
        return self.strategy.should_exit(index)

    def should_exit(self, index: int) -> bool:
        return self.strategy.should_enter(index)

    def __repr__(self) -> str:
        return f"~{self.strategy!r}"


class CombinedBuyAndSellStrategy(Strategy):
    """Entry rule from one strategy, exit rule from another."""

    def __init__(self, buy_strategy: Strategy, sell_strategy: Strategy) -> None:
        self.buy_strategy = _require_strategy(buy_strategy, "buy_strategy")
        self.sell_strategy = _require_strategy(sell_strategy, "sell_strategy")

    def should_enter(self, index: int) -> bool:
        return self.buy_strategy.should_enter(index)

    def should_exit(self, index: int) -> bool:
        return self.sell_strategy.should_exit(index)

    def __repr__(self) -> str:
        return f"CombinedBuyAndSellStrategy({self.buy_strategy!r}, {self.sell_strategy!r})"


class AlwaysOperateStrategy(Strategy):
    """Enters and exits at every index."""

    def should_enter(self, index: int) -> bool:
        return True

    def should_exit(self, index: int) -> bool:
        return True


__all__ = [
    "AlwaysOperateStrategy",
    "AndStrategy",
    "CombinedBuyAndSellStrategy",
    "OppositeStrategy",
    "OrStrategy",
]
