"""Fixed-context decimal numbers used for every price and indicator value.

All arithmetic goes through :class:`decimal.Decimal` rounded to one explicit
:class:`NumContext` (32 significant digits, ROUND_HALF_UP unless configured
otherwise). Results of binary operations carry the left operand's context,
so a chain of indicator computations never silently changes precision.
"""

from __future__ import annotations

import decimal
import math
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any, ClassVar, Union

from ta_engine.errors import InvalidArgumentError, NumArithmeticError

NumLike = Union["Num", Decimal, int, float, str]


@dataclass(frozen=True, slots=True)
class NumContext:
    """Precision and rounding applied to every Num operation."""

    precision: int = 32
    rounding: str = decimal.ROUND_HALF_UP

    def __post_init__(self) -> None:
        if self.precision < 1:
            raise InvalidArgumentError(
                "precision must be at least 1", argument="precision", value=self.precision
            )

    def decimal_context(self) -> decimal.Context:
        return _decimal_context(self.precision, self.rounding)


@lru_cache(maxsize=None)
def _decimal_context(precision: int, rounding: str) -> decimal.Context:
    try:
        return decimal.Context(
            prec=precision,
            rounding=rounding,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(
            f"Invalid rounding mode: {rounding}", argument="rounding", value=rounding
        ) from exc


DEFAULT_CONTEXT = NumContext()


def _to_decimal(value: Any, ctx: decimal.Context) -> Decimal:
    if isinstance(value, Num):
        return ctx.create_decimal(value._delegate)
    if isinstance(value, bool):
        raise InvalidArgumentError("Num cannot be built from a bool", argument="value", value=value)
    if isinstance(value, float):
        # float() drops subclasses such as numpy.float64, whose repr is not a number
        number = float(value)
        if not math.isfinite(number):
            raise InvalidArgumentError("Num must be finite", argument="value", value=value)
        # Shortest round-tripping text, so Num(0.1) == Num("0.1")
        source: Any = repr(number)
    elif isinstance(value, (int, Decimal)):
        source = value
    elif isinstance(value, str):
        source = value.strip()
    else:
        raise InvalidArgumentError(
            f"Unsupported numeric type: {type(value).__name__}", argument="value", value=value
        )
    try:
        result = ctx.create_decimal(source)
    except decimal.DecimalException as exc:
        raise InvalidArgumentError(
            f"Cannot parse {value!r} as a number", argument="value", value=value
        ) from exc
    if not result.is_finite():
        raise InvalidArgumentError("Num must be finite", argument="value", value=value)
    return result


class Num:
    """Immutable signed decimal rounded to a fixed :class:`NumContext`.

    ``==`` accepts ``Num``, ``int`` and ``Decimal`` only; against a ``float`` it
    is ``NotImplemented`` and therefore ``False`` (``Num("0.5") == 0.5``), so
    that equal values always hash alike. Ordering (``<``, ``<=``, ...) and
    :meth:`is_equal` do accept floats, converted like ``Num(0.5)``.
    """

    __slots__ = ("_delegate", "_context")

    ZERO: ClassVar[Num]
    ONE: ClassVar[Num]
    TWO: ClassVar[Num]
    TEN: ClassVar[Num]
    HUNDRED: ClassVar[Num]

    def __init__(self, value: NumLike, context: NumContext | None = None) -> None:
        if context is None:
            context = value._context if isinstance(value, Num) else DEFAULT_CONTEXT
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_delegate", _to_decimal(value, context.decimal_context()))

    @classmethod
    def of(cls, value: NumLike, context: NumContext | None = None) -> Num:
        """Return ``value`` unchanged when it already is a Num in ``context``."""
        if isinstance(value, Num) and (context is None or value._context == context):
            return value
        return cls(value, context)

    @classmethod
    def _wrap(cls, delegate: Decimal, context: NumContext) -> Num:
        # ``delegate`` was produced by ``context`` and is already rounded
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_context", context)
        object.__setattr__(instance, "_delegate", delegate)
        return instance

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Num is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (Num, (str(self._delegate), self._context))

    @property
    def context(self) -> NumContext:
        return self._context

    def with_context(self, context: NumContext) -> Num:
        """Re-round this value into another context."""
        return Num(self, context)

    # Arithmetic

    def _coerce(self, other: Any) -> Num | None:
        if isinstance(other, Num):
            return other
        if isinstance(other, (int, float, str, Decimal)) and not isinstance(other, bool):
            return Num(other, self._context)
        return None

    def _run(self, operation: str, func: Any, *operands: Decimal) -> Num:
        try:
            return Num._wrap(func(*operands), self._context)
        except decimal.DecimalException as exc:
            raise NumArithmeticError(
                f"Invalid decimal operation: {operation}", operation=operation, original_error=exc
            ) from exc

    def __add__(self, other: Any) -> Num:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        ctx = self._context.decimal_context()
        return self._run("add", ctx.add, self._delegate, rhs._delegate)

    def __radd__(self, other: Any) -> Num:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Num:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        ctx = self._context.decimal_context()
        return self._run("subtract", ctx.subtract, self._delegate, rhs._delegate)

    def __rsub__(self, other: Any) -> Num:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: Any) -> Num:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        ctx = self._context.decimal_context()
        return self._run("multiply", ctx.multiply, self._delegate, rhs._delegate)

    def __rmul__(self, other: Any) -> Num:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Num:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if rhs.is_zero():
            raise NumArithmeticError(f"Division of {self} by zero", operation="divide")
        ctx = self._context.decimal_context()
        return self._run("divide", ctx.divide, self._delegate, rhs._delegate)

    def __rtruediv__(self, other: Any) -> Num:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def remainder(self, divisor: NumLike) -> Num:
        """Remainder of ``self / divisor``; the sign follows the dividend."""
        rhs = self._coerce(divisor)
        if rhs is None:
            raise InvalidArgumentError("Unsupported divisor", argument="divisor", value=divisor)
        if rhs.is_zero():
            raise NumArithmeticError(f"Remainder of {self} by zero", operation="remainder")
        ctx = self._context.decimal_context()
        return self._run("remainder", ctx.remainder, self._delegate, rhs._delegate)

    def __mod__(self, other: Any) -> Num:
        if self._coerce(other) is None:
            return NotImplemented
        return self.remainder(other)

    def pow(self, exponent: int) -> Num:
        """Integer power; ``x.pow(0)`` is one for every x, including zero."""
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise InvalidArgumentError(
                "exponent must be an integer", argument="exponent", value=exponent
            )
        if exponent == 0:
            return Num(1, self._context)
        if exponent < 0 and self.is_zero():
            raise NumArithmeticError("Zero raised to a negative power", operation="pow")
        ctx = self._context.decimal_context()
        return self._run("pow", ctx.power, self._delegate, Decimal(exponent))

    def __pow__(self, exponent: int) -> Num:
        return self.pow(exponent)

    def __neg__(self) -> Num:
        return self._run("negate", self._context.decimal_context().minus, self._delegate)

    def __pos__(self) -> Num:
        return self

    def __abs__(self) -> Num:
        return self._run("abs", self._context.decimal_context().abs, self._delegate)

    # Comparison

    def compare(self, other: NumLike) -> int:
        """Three-way numeric comparison: -1, 0 or 1."""
        rhs = self._coerce(other)
        if rhs is None:
            raise InvalidArgumentError("Cannot compare with a non-number", argument="other")
        if self._delegate < rhs._delegate:
            return -1
        if self._delegate > rhs._delegate:
            return 1
        return 0

    def is_zero(self) -> bool:
        return self._delegate.is_zero()

    def is_positive(self) -> bool:
        return self.compare(0) > 0

    def is_positive_or_zero(self) -> bool:
        return self.compare(0) >= 0

    def is_negative(self) -> bool:
        return self.compare(0) < 0

    def is_negative_or_zero(self) -> bool:
        return self.compare(0) <= 0

    def is_equal(self, other: NumLike) -> bool:
        return self.compare(other) == 0

    def is_greater_than(self, other: NumLike) -> bool:
        return self.compare(other) > 0

    def is_greater_than_or_equal(self, other: NumLike) -> bool:
        return self.compare(other) >= 0

    def is_less_than(self, other: NumLike) -> bool:
        return self.compare(other) < 0

    def is_less_than_or_equal(self, other: NumLike) -> bool:
        return self.compare(other) <= 0

    def __eq__(self, other: object) -> bool:
        # floats are left out so that equal values always hash equally
        if isinstance(other, (Num, int, Decimal)) and not isinstance(other, bool):
            return self.compare(other) == 0
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._delegate)

    def __lt__(self, other: Any) -> bool:
        if self._coerce(other) is None:
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Any) -> bool:
        if self._coerce(other) is None:
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Any) -> bool:
        if self._coerce(other) is None:
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Any) -> bool:
        if self._coerce(other) is None:
            return NotImplemented
        return self.compare(other) >= 0

    def __bool__(self) -> bool:
        return not self.is_zero()

    # Conversion (lossy / representational only)

    def to_decimal(self) -> Decimal:
        return self._delegate

    def to_float(self) -> float:
        return float(self._delegate)

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return str(self._delegate)

    def __repr__(self) -> str:
        return f"Num('{self._delegate}')"


Num.ZERO = Num(0)
Num.ONE = Num(1)
Num.TWO = Num(2)
Num.TEN = Num(10)
Num.HUNDRED = Num(100)


__all__ = ["DEFAULT_CONTEXT", "Num", "NumContext", "NumLike"]
