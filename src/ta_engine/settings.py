"""Typed configuration backed by environment variables."""

from __future__ import annotations

import decimal
from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path
from typing import ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ta_engine.core.num import NumContext

_DEFAULT_ENV_FILES: tuple[Path, ...] = (Path(".env"),)

_ROUNDING_MODES = frozenset(
    {
        decimal.ROUND_CEILING,
        decimal.ROUND_DOWN,
        decimal.ROUND_FLOOR,
        decimal.ROUND_HALF_DOWN,
        decimal.ROUND_HALF_EVEN,
        decimal.ROUND_HALF_UP,
        decimal.ROUND_UP,
        decimal.ROUND_05UP,
    }
)


class Settings(BaseSettings):
    """Toolkit configuration loaded from the environment and an optional `.env` file."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="TA_ENGINE_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    decimal_precision: int = Field(
        default=32, ge=1, description="Significant digits kept by every Num operation."
    )
    rounding: str = Field(
        default=decimal.ROUND_HALF_UP,
        description="Rounding mode name from the decimal module (e.g. ROUND_HALF_UP).",
    )
    log_level: str = Field(default="INFO", description="Root log level.")
    log_dir: Path | None = Field(
        default=None,
        description="Directory for rotating log files; console only when unset.",
    )
    json_logs: bool = Field(
        default=False, description="Also write JSON-lines logs next to the text log."
    )

    @field_validator("rounding")
    @classmethod
    def _check_rounding(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not normalized.startswith("ROUND_"):
            normalized = f"ROUND_{normalized}"
        if normalized not in _ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {value}")
        return normalized

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return normalized

    def num_context(self) -> NumContext:
        """Numeric context built from the configured precision and rounding."""
        return NumContext(precision=self.decimal_precision, rounding=self.rounding)


def _existing_env_files() -> list[str]:
    return [str(path) for path in _DEFAULT_ENV_FILES if path.exists()]


@lru_cache
def get_settings(_env_files: Sequence[str] | None = None) -> Settings:
    """Load settings once per process, respecting `.env` fallbacks."""
    env_files = list(_env_files) if _env_files is not None else _existing_env_files()
    if env_files:
        return Settings(_env_file=env_files)
    return Settings()


__all__ = ["Settings", "get_settings"]
