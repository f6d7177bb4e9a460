"""Build :class:`TimeSeries` objects from pandas frames and CSV files."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd

from ta_engine.core.market import Bar
from ta_engine.core.num import Num, NumContext
from ta_engine.core.series import TimeSeries
from ta_engine.errors import DataError, TAError
from ta_engine.settings import get_settings
from ta_engine.utilities.logging_patterns import get_logger

logger = get_logger(__name__, component="data")

PRICE_COLUMNS = ("open", "high", "low", "close", "volume")
TIMESTAMP_COLUMNS = ("timestamp", "date", "datetime", "time")


def _as_num(value: object, context: NumContext) -> Num:
    """Convert mixed numeric types (numpy, float, int, str) into ``Num``."""
    if isinstance(value, (Num, int, float, str)) and not isinstance(value, bool):
        return Num.of(value, context)
    return Num.of(str(value), context)


def _coerce_timestamp(raw: object) -> datetime:
    if isinstance(raw, pd.Timestamp):
        return raw.to_pydatetime()
    if isinstance(raw, datetime):
        return raw
    return pd.Timestamp(raw).to_pydatetime()


def _column_map(frame: pd.DataFrame) -> dict[str, str]:
    return {str(column).strip().lower(): column for column in frame.columns}


def series_from_dataframe(
    frame: pd.DataFrame,
    name: str = "",
    symbol: str = "",
    source: str | None = None,
    context: NumContext | None = None,
) -> TimeSeries:
    """Build a series from an OHLCV frame.

    Column names are matched case-insensitively. Timestamps come from a
    ``timestamp`` (or ``date``/``datetime``/``time``) column, else from a
    ``DatetimeIndex``. Rows are kept in frame order. Prices are built in
    ``context``, by default the one configured through :func:`get_settings`.
    """
    if not isinstance(frame, pd.DataFrame):
        raise DataError(
            f"Expected a pandas DataFrame, got {type(frame).__name__}", source=source
        )

    columns = _column_map(frame)
    missing = [column for column in PRICE_COLUMNS if column not in columns]
    if missing:
        raise DataError(f"Missing columns: {', '.join(missing)}", source=source).add_context(
            available=[str(column) for column in frame.columns]
        )

    timestamp_column = next((columns[c] for c in TIMESTAMP_COLUMNS if c in columns), None)
    if timestamp_column is not None:
        timestamps = pd.to_datetime(frame[timestamp_column])
    elif isinstance(frame.index, pd.DatetimeIndex):
        timestamps = frame.index.to_series()
    else:
        raise DataError("No timestamp column or DatetimeIndex found", source=source)

    if context is None:
        context = get_settings().num_context()

    bars: list[Bar] = []
    for position, (timestamp, (_, row)) in enumerate(zip(timestamps, frame.iterrows())):
        try:
            bars.append(
                Bar(
                    timestamp=_coerce_timestamp(timestamp),
                    open=_as_num(row[columns["open"]], context),
                    high=_as_num(row[columns["high"]], context),
                    low=_as_num(row[columns["low"]], context),
                    close=_as_num(row[columns["close"]], context),
                    volume=_as_num(row[columns["volume"]], context),
                    symbol=symbol,
                    context=context,
                )
            )
        except (TAError, ValueError, TypeError) as exc:
            raise DataError(
                f"Invalid row {position}: {exc}", source=source, original_error=exc
            ) from exc

    try:
        series = TimeSeries(bars, name=name)
    except TAError as exc:
        raise DataError(str(exc), source=source, original_error=exc) from exc

    logger.debug("Built series from frame", series=name, bars=len(bars), source=source)
    return series


def load_series_csv(
    path: str | Path,
    name: str | None = None,
    symbol: str = "",
    context: NumContext | None = None,
) -> TimeSeries:
    """Read an OHLCV CSV file; the series name defaults to the file stem."""
    csv_path = Path(path)
    if not csv_path.is_file():
        raise DataError(f"CSV file not found: {csv_path}", source=str(csv_path))
    try:
        frame = pd.read_csv(csv_path)
    except (OSError, ValueError) as exc:
        raise DataError(
            f"Could not read {csv_path}: {exc}", source=str(csv_path), original_error=exc
        ) from exc
    return series_from_dataframe(
        frame,
        name=name if name is not None else csv_path.stem,
        symbol=symbol,
        source=str(csv_path),
        context=context,
    )


__all__ = ["load_series_csv", "series_from_dataframe"]
