"""Trading strategy interface and the combinator entry points."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ta_engine.core.orders import Trade

if TYPE_CHECKING:  # pragma: no cover
    from .combinators import AndStrategy, OppositeStrategy, OrStrategy


class Strategy(ABC):
    """Pair of enter/exit rules evaluated per bar index.

    Strategies are immutable once built; combining two strategies produces a
    new one and leaves both operands untouched.
    """

    @abstractmethod
    def should_enter(self, index: int) -> bool:
        """True when a trade should be opened at ``index``."""

    @abstractmethod
    def should_exit(self, index: int) -> bool:
        """True when an open trade should be closed at ``index``."""

    def should_operate(self, index: int, trade: Trade) -> bool:
        if trade.is_new:
            return self.should_enter(index)
        if trade.is_opened:
            return self.should_exit(index)
        return False

    def and_(self, other: Strategy) -> AndStrategy:
        from .combinators import AndStrategy

        return AndStrategy(self, other)

    def or_(self, other: Strategy) -> OrStrategy:
        from .combinators import OrStrategy

        return OrStrategy(self, other)

    def opposite(self) -> OppositeStrategy:
        from .combinators import OppositeStrategy

        return OppositeStrategy(self)

    def __and__(self, other: Strategy) -> AndStrategy:
        return self.and_(other)

    def __or__(self, other: Strategy) -> OrStrategy:
        return self.or_(other)

    def __invert__(self) -> OppositeStrategy:
        return self.opposite()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = ["Strategy"]
