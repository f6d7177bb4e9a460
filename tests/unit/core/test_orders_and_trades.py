import pytest

from ta_engine.core import Num, Order, OrderSide, Trade, TradeState
from ta_engine.errors import InvalidTradeError


def test_order_side_opposite() -> None:
    assert OrderSide.BUY.opposite is OrderSide.SELL
    assert OrderSide.SELL.opposite is OrderSide.BUY


def test_order_factories() -> None:
    order = Order.buy(3, "10.5")
    assert order == Order(OrderSide.BUY, 3, Num("10.5"))
    assert Order.sell(4, 2).side is OrderSide.SELL


def test_order_is_frozen() -> None:
    order = Order.buy(0, 1)
    with pytest.raises(AttributeError):
        order.index = 5  # type: ignore[misc]


class TestTradeLifecycle:
    def test_new_trade(self) -> None:
        trade = Trade()
        assert trade.state is TradeState.NEW
        assert trade.is_new and not trade.is_opened and not trade.is_closed
        assert trade.entry is None and trade.exit is None
        assert trade.profit is None

    def test_long_trade(self) -> None:
        trade = Trade()
        entry = trade.operate(2, 10)
        assert entry == Order.buy(2, 10)
        assert trade.state is TradeState.OPENED
        assert trade.profit is None

        exit_order = trade.operate(5, 12)
        assert exit_order == Order.sell(5, 12)
        assert trade.state is TradeState.CLOSED
        assert trade.profit == 2

    def test_short_trade_profit_is_sign_flipped(self) -> None:
        trade = Trade(OrderSide.SELL)
        trade.operate(0, 10)
        trade.operate(1, 12)
        assert trade.entry.side is OrderSide.SELL
        assert trade.exit.side is OrderSide.BUY
        assert trade.profit == -2

    def test_exit_at_entry_index_is_allowed(self) -> None:
        trade = Trade()
        trade.operate(3, 1)
        trade.operate(3, 1)
        assert trade.is_closed

    def test_exit_before_entry_rejected(self) -> None:
        trade = Trade()
        trade.operate(5, 1)
        with pytest.raises(InvalidTradeError):
            trade.operate(4, 1)
        assert trade.is_opened

    def test_closed_trade_rejects_operations(self) -> None:
        trade = Trade()
        trade.operate(0, 1)
        trade.operate(1, 2)
        with pytest.raises(InvalidTradeError) as exc_info:
            trade.operate(2, 3)
        assert exc_info.value.context["state"] == "CLOSED"


def test_trade_equality_by_orders() -> None:
    first, second = Trade(), Trade()
    for trade in (first, second):
        trade.operate(1, 5)
        trade.operate(2, 6)
    assert first == second
    assert first != Trade()
