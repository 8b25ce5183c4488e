"""Candle (OHLCV) data model."""

from datetime import date as date_type
from datetime import datetime as datetime_type
from typing import Optional

from pydantic import BaseModel, Field


class Candle(BaseModel):
    """Represents a single OHLCV candle."""

    date: date_type = Field(..., description="Calendar day of the candle")
    datetime: Optional[datetime_type] = Field(
        default=None, description="Finer-grained timestamp for intraday candles"
    )
    open: float = Field(..., gt=0, allow_inf_nan=False, description="Opening price")
    high: float = Field(..., gt=0, allow_inf_nan=False, description="High price")
    low: float = Field(..., gt=0, allow_inf_nan=False, description="Low price")
    close: float = Field(..., gt=0, allow_inf_nan=False, description="Closing price")
    volume: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Trading volume"
    )

    model_config = {"frozen": True}

    @property
    def timestamp(self) -> datetime_type:
        """Ordering key: the intraday timestamp, or midnight of the day."""
        if self.datetime is not None:
            return self.datetime
        return datetime_type.combine(self.date, datetime_type.min.time())
