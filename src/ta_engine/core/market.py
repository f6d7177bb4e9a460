"""Core market data types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ta_engine.core.num import Num, NumContext, NumLike


@dataclass(frozen=True, slots=True)
class Bar:
    """Single OHLCV candle.

    Price and volume fields accept anything :class:`Num` can be built from and
    are normalised to ``Num`` on construction. With ``context`` set, every
    field is rounded into that context; otherwise ``Num`` inputs keep their
    own context and other inputs use the default one.
    """

    timestamp: datetime
    open: Num
    high: Num
    low: Num
    close: Num
    volume: Num = Num.ZERO
    symbol: str = ""
    context: NumContext | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("open", "high", "low", "close", "volume"):
            object.__setattr__(self, name, Num.of(getattr(self, name), self.context))

    @classmethod
    def from_close(
        cls,
        timestamp: datetime,
        close: NumLike,
        symbol: str = "",
        context: NumContext | None = None,
    ) -> Bar:
        """Flat bar whose open, high, low and close all equal ``close``."""
        price = Num.of(close, context)
        return cls(
            timestamp=timestamp,
            open=price,
            high=price,
            low=price,
            close=price,
            volume=Num(0, price.context),
            symbol=symbol,
            context=context,
        )


__all__ = ["Bar"]
