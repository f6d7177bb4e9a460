"""Core trading enums used across all packages."""

from enum import Enum


class OrderSide(str, Enum):
    """Order direction - buy or sell."""

    BUY = "BUY"
    SELL = "SELL"

    @property
    def opposite(self) -> "OrderSide":
        return OrderSide.SELL if self is OrderSide.BUY else OrderSide.BUY


class TradeState(str, Enum):
    """Trade lifecycle state."""

    NEW = "NEW"  # No order recorded yet
    OPENED = "OPENED"  # Entry order recorded
    CLOSED = "CLOSED"  # Exit order recorded (terminal)
