"""Candle normalisation and range presets."""

from stockvision.data.normalize import (
    clean_candles,
    load_candles_file,
    normalize_ticker,
    parse_time_series,
    to_number,
)
from stockvision.data.ranges import RANGE_CONFIG, RangeConfig, resolve_range_config

__all__ = [
    "RANGE_CONFIG",
    "RangeConfig",
    "clean_candles",
    "load_candles_file",
    "normalize_ticker",
    "parse_time_series",
    "resolve_range_config",
    "to_number",
]
