"""
Centralized error handling for ta-engine

Every failure raised by the toolkit derives from :class:`TAError`. Argument and
range problems also derive from the matching builtin (``ValueError``,
``IndexError``, ``ArithmeticError``) so callers can catch them either way.
"""

import logging
import numbers
import sys
import traceback
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ta_engine.utilities.logging_patterns import StructuredLogger

_logger: Optional["StructuredLogger"] = None


def _get_logger() -> "StructuredLogger":
    global _logger
    if _logger is None:
        from ta_engine.utilities.logging_patterns import get_logger as _get_structured_logger

        _logger = _get_structured_logger(__name__, component="errors")
    return _logger


def _capture_traceback() -> str:
    """Return the active traceback or, if none, a snapshot of the current stack."""

    exc_type, exc_value, exc_tb = sys.exc_info()
    if exc_type is not None and exc_tb is not None:
        return "".join(traceback.format_exception(exc_type, exc_value, exc_tb))

    stack = traceback.format_stack()
    if not stack:
        return ""
    # Drop the last frame so the helper itself does not appear in the stack trace
    return "".join(stack[:-1])


class TAError(Exception):
    """Base exception class for all ta-engine errors"""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.timestamp = datetime.now()
        self.traceback = _capture_traceback()
        self.original_error = original_error

    def add_context(self, **kwargs: Any) -> "TAError":
        """Add additional context to the error"""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "traceback": self.traceback,
        }


class InvalidArgumentError(TAError, ValueError):
    """Raised when a caller passes a missing or out-of-domain argument"""

    def __init__(
        self, message: str, argument: str | None = None, value: Any = None, **kwargs: Any
    ) -> None:
        kwargs.setdefault("error_code", "INVALID_ARGUMENT")
        super().__init__(message, **kwargs)
        if argument:
            self.add_context(argument=argument, value=value)


class IndexOutOfRangeError(InvalidArgumentError, IndexError):
    """Raised when an index falls outside a series' valid range"""

    def __init__(self, index: int, begin: int, end: int, **kwargs: Any) -> None:
        super().__init__(
            f"Index {index} is outside the valid range [{begin}, {end}]",
            error_code="INDEX_OUT_OF_RANGE",
            **kwargs,
        )
        self.index = index
        self.add_context(index=index, begin=begin, end=end)


class NumArithmeticError(TAError, ArithmeticError):
    """Raised when decimal arithmetic has no defined result (e.g. division by zero)"""

    def __init__(self, message: str, operation: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, error_code="ARITHMETIC_ERROR", **kwargs)
        if operation:
            self.add_context(operation=operation)


class InvalidTradeError(TAError):
    """Raised when a trade is asked for an illegal state transition"""

    def __init__(self, message: str, state: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, error_code="INVALID_TRADE", **kwargs)
        if state:
            self.add_context(state=state)


class DataError(TAError):
    """Raised when a series cannot be built from external data"""

    def __init__(self, message: str, source: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, error_code="DATA_ERROR", **kwargs)
        if source:
            self.add_context(source=source)


def require(value: Any, argument: str) -> Any:
    """Return ``value`` or raise :class:`InvalidArgumentError` when it is ``None``."""
    if value is None:
        raise InvalidArgumentError(f"{argument} cannot be None", argument=argument)
    return value


def require_positive(value: int, argument: str) -> int:
    """Return ``value`` or raise when it is not a strictly positive integer."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
        raise InvalidArgumentError(
            f"{argument} must be a positive integer", argument=argument, value=value
        )
    return int(value)


def log_error(error: TAError, level: int = logging.ERROR) -> None:
    """Log an error with full context"""
    _get_logger().log(level, f"{error.error_code}: {error.message}", error_data=error.to_dict())


__all__ = [
    "TAError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "NumArithmeticError",
    "InvalidTradeError",
    "DataError",
    "require",
    "require_positive",
    "log_error",
]
