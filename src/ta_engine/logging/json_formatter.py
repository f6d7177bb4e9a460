"""JSON-lines logging formatter with run context and Decimal support."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from .correlation import get_log_context

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class StructuredJSONFormatter(logging.Formatter):
    """One sorted JSON object per record: core fields, run context, then ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName or "<module>",
            "line": record.lineno,
            **get_log_context(),
        }
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__ if exc_type else "Unknown",
                "message": str(exc_value) if exc_value else "",
            }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                entry.setdefault(key, value)

        try:
            return json.dumps(entry, ensure_ascii=False, sort_keys=True, cls=DecimalEncoder)
        except (TypeError, ValueError) as exc:
            fallback = {key: entry[key] for key in ("timestamp", "level", "logger")}
            fallback["message"] = f"JSON serialization failed: {exc}"
            fallback["original_message"] = entry["message"]
            return json.dumps(fallback, ensure_ascii=False, sort_keys=True, default=str)


class DecimalEncoder(json.JSONEncoder):
    """Writes ``Decimal`` and ``Num`` values as exact strings."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal) or hasattr(obj, "to_decimal"):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


__all__ = ["DecimalEncoder", "StructuredJSONFormatter"]
