"""Orders and trades produced by the backtest runner."""

from __future__ import annotations

from dataclasses import dataclass

from ta_engine.core.num import Num, NumLike
from ta_engine.core.trading import OrderSide, TradeState
from ta_engine.errors import InvalidTradeError


@dataclass(frozen=True, slots=True)
class Order:
    """A single execution instruction at a bar index."""

    side: OrderSide
    index: int
    price: Num

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", Num.of(self.price))

    @classmethod
    def buy(cls, index: int, price: NumLike) -> Order:
        return cls(OrderSide.BUY, index, Num.of(price))

    @classmethod
    def sell(cls, index: int, price: NumLike) -> Order:
        return cls(OrderSide.SELL, index, Num.of(price))


class Trade:
    """Entry/exit order pair moving NEW -> OPENED -> CLOSED.

    The exit order is always on the opposite side of the entry order and can
    never precede it. A closed trade rejects further operations.
    """

    __slots__ = ("_entry_side", "_entry", "_exit")

    def __init__(self, entry_side: OrderSide = OrderSide.BUY) -> None:
        self._entry_side = OrderSide(entry_side)
        self._entry: Order | None = None
        self._exit: Order | None = None

    @property
    def entry_side(self) -> OrderSide:
        return self._entry_side

    @property
    def entry(self) -> Order | None:
        return self._entry

    @property
    def exit(self) -> Order | None:
        return self._exit

    @property
    def state(self) -> TradeState:
        if self._exit is not None:
            return TradeState.CLOSED
        if self._entry is not None:
            return TradeState.OPENED
        return TradeState.NEW

    @property
    def is_new(self) -> bool:
        return self.state is TradeState.NEW

    @property
    def is_opened(self) -> bool:
        return self.state is TradeState.OPENED

    @property
    def is_closed(self) -> bool:
        return self.state is TradeState.CLOSED

    def operate(self, index: int, price: NumLike) -> Order:
        """Record the next order (entry, then exit) and return it."""
        entry = self._entry
        if entry is None:
            self._entry = Order(self._entry_side, index, Num.of(price))
            return self._entry
        if self._exit is not None:
            raise InvalidTradeError(
                "Cannot operate on a closed trade", state=TradeState.CLOSED.value
            )
        if index < entry.index:
            raise InvalidTradeError(
                f"Exit index {index} precedes entry index {entry.index}",
                state=TradeState.OPENED.value,
            )
        self._exit = Order(self._entry_side.opposite, index, Num.of(price))
        return self._exit

    @property
    def profit(self) -> Num | None:
        """Exit minus entry price, sign-flipped for short trades; None until closed."""
        if self._entry is None or self._exit is None:
            return None
        delta = self._exit.price - self._entry.price
        return delta if self._entry_side is OrderSide.BUY else -delta

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trade):
            return NotImplemented
        return (self._entry_side, self._entry, self._exit) == (
            other._entry_side,
            other._entry,
            other._exit,
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Trade(state={self.state.value}, entry={self._entry}, exit={self._exit})"


__all__ = ["Order", "Trade"]
