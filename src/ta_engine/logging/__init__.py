"""Logging configuration and run-context helpers."""

from .correlation import get_log_context, run_context
from .json_formatter import StructuredJSONFormatter
from .setup import configure_logging

__all__ = ["StructuredJSONFormatter", "configure_logging", "get_log_context", "run_context"]
