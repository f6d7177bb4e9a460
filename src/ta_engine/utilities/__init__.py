"""Shared utilities."""

from .logging_patterns import StructuredLogger, get_logger, log_operation, log_trade_event

__all__ = ["StructuredLogger", "get_logger", "log_operation", "log_trade_event"]
