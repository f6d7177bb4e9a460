"""Centralized logging setup for ta-engine."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from ta_engine.logging.json_formatter import StructuredJSONFormatter
from ta_engine.settings import Settings, get_settings

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_int(name: str, default: int) -> int:
    raw_value = os.environ.get(name)
    if raw_value is None or not str(raw_value).strip():
        return default
    return int(raw_value)


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure console and (optionally) rotating file logging.

    Safe to call more than once: handlers already attached to the root logger
    (including pytest's capture handlers) are not duplicated.

    Args:
        settings: Configuration to apply; defaults to :func:`get_settings`.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    existing_targets = {
        getattr(handler, "baseFilename", None)
        for handler in root.handlers
        if hasattr(handler, "baseFilename")
    }

    console_handlers = [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.FileHandler)
        and type(h).__name__ not in {"LogCaptureHandler", "_LiveLoggingNullHandler"}
    ]
    if not console_handlers:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(logging.Formatter(_TEXT_FORMAT))
        root.addHandler(console)

    if settings.log_dir is None:
        return

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    max_bytes = _env_int("TA_ENGINE_LOG_MAX_BYTES", 20 * 1024 * 1024)
    backups = _env_int("TA_ENGINE_LOG_BACKUP_COUNT", 5)

    text_path = str(log_dir / "ta_engine.log")
    if text_path not in existing_targets:
        text_handler = logging.handlers.RotatingFileHandler(
            text_path,
            maxBytes=max_bytes,
            backupCount=backups,
        )
        text_handler.setLevel(level)
        text_handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
        root.addHandler(text_handler)

    if not settings.json_logs:
        return

    json_path = str(log_dir / "ta_engine.jsonl")
    if json_path not in existing_targets:
        json_handler = logging.handlers.RotatingFileHandler(
            json_path,
            maxBytes=max_bytes,
            backupCount=backups,
        )
        json_handler.setLevel(level)
        json_handler.setFormatter(StructuredJSONFormatter())
        root.addHandler(json_handler)


__all__ = ["configure_logging"]
