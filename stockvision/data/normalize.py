"""Candle normalisation for provider payloads and local files.

The engine expects ascending, de-duplicated candles with positive
closes. Everything that turns raw rows into such a list lives here.
"""

import csv
import json
import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from stockvision.models import Candle

logger = logging.getLogger(__name__)


def normalize_ticker(value: Any) -> str:
    """Strip and upper-case a ticker; None becomes an empty string."""
    return str(value or "").strip().upper()


def to_number(value: Any) -> float:
    """Coerce a provider value to a finite float (0 when impossible)."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def _parse_timestamp(raw: Any) -> tuple[date, datetime | None]:
    text = str(raw).strip()
    if len(text) <= 10:
        return date.fromisoformat(text), None
    parsed = datetime.fromisoformat(text)
    return parsed.date(), parsed


def candle_from_row(row: dict) -> Candle | None:
    """Build a Candle from one raw OHLCV row.

    Accepts a ``datetime`` or ``date`` key. Rows with a missing timestamp,
    a non-positive close or otherwise invalid prices are skipped.
    """
    raw_time = row.get("datetime") or row.get("date")
    if not raw_time:
        return None

    close = to_number(row.get("close"))
    if close <= 0:
        return None

    try:
        day, moment = _parse_timestamp(raw_time)
        return Candle(
            date=day,
            datetime=moment,
            open=to_number(row.get("open")),
            high=to_number(row.get("high")),
            low=to_number(row.get("low")),
            close=close,
            volume=to_number(row.get("volume")),
        )
    except (ValueError, ValidationError) as e:
        logger.debug("Skipping candle row %r: %s", row, e)
        return None


def clean_candles(candles: Iterable[Candle]) -> list[Candle]:
    """Sort ascending and collapse duplicate timestamps (last one wins)."""
    by_time: dict[datetime, Candle] = {}
    for candle in candles:
        by_time[candle.timestamp] = candle
    return [by_time[key] for key in sorted(by_time)]


def parse_time_series(payload: Any) -> list[Candle]:
    """Convert a provider ``time_series`` payload into clean candles.

    Args:
        payload: Decoded JSON, ``{"values": [{"datetime": ..., "open": ...}]}``.

    Returns:
        Ascending candles with positive closes.

    Raises:
        ValueError: The provider reported an error or sent no values.
    """
    if isinstance(payload, dict) and payload.get("status") == "error":
        raise ValueError(payload.get("message") or "Provider request failed")

    values = payload.get("values") if isinstance(payload, dict) else None
    if not isinstance(values, list):
        raise ValueError("No candle data returned by provider")

    candles = [c for c in (candle_from_row(row) for row in values) if c is not None]
    skipped = len(values) - len(candles)
    if skipped:
        logger.debug("Dropped %d invalid candle rows", skipped)
    return clean_candles(candles)


def load_candles_file(path: Path) -> list[Candle]:
    """Load candles from a CSV (header row) or JSON file.

    JSON may be a list of rows or a provider ``time_series`` payload.
    Column names are matched case-insensitively.
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        with open(path) as f:
            payload = json.load(f)
        if isinstance(payload, list):
            payload = {"values": payload}
        return parse_time_series(payload)

    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        rows = [
            {(k or "").strip().lower(): v for k, v in row.items()}
            for row in reader
        ]
    return parse_time_series({"values": rows})
