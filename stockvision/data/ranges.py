"""Chart range presets mapping a UI range label to a candle request."""

from typing import Optional

from pydantic import BaseModel

DEFAULT_RANGE = "3M"

RANGE_CONFIG = {
    "1D": {"interval": "5min", "outputsize": 96},
    "5D": {"interval": "15min", "outputsize": 130},
    "1M": {"interval": "1h", "outputsize": 180},
    "3M": {"interval": "1day", "outputsize": 90},
    "6M": {"interval": "1day", "outputsize": 180},
    "1Y": {"interval": "1day", "outputsize": 260},
}


class RangeConfig(BaseModel):
    interval: str
    outputsize: int
    label: str

    model_config = {"frozen": True}


def resolve_range_config(
    range_label: Optional[str] = None,
    interval: Optional[str] = None,
    outputsize: Optional[int] = None,
) -> RangeConfig:
    """Pick the candle interval and count for a range.

    An explicit interval and outputsize win and are labelled ``custom``;
    unknown labels fall back to the 3M preset.
    """
    if interval and outputsize:
        return RangeConfig(interval=interval, outputsize=int(outputsize), label="custom")

    label = str(range_label or DEFAULT_RANGE).upper()
    preset = RANGE_CONFIG.get(label, RANGE_CONFIG[DEFAULT_RANGE])
    return RangeConfig(label=label, **preset)
