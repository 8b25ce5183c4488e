"""Signal classification and composite scoring."""

from stockvision.signals.scoring import (
    MAX_FLAGS,
    build_flags,
    classify_momentum,
    classify_risk,
    classify_trend,
    composite_score,
)

__all__ = [
    "MAX_FLAGS",
    "build_flags",
    "classify_momentum",
    "classify_risk",
    "classify_trend",
    "composite_score",
]
