"""Per-ticker metrics and cross-ticker correlation."""

from stockvision.analysis.correlation import build_correlation_matrix, pearson
from stockvision.analysis.metrics import derive_metrics, empty_snapshot

__all__ = [
    "build_correlation_matrix",
    "derive_metrics",
    "empty_snapshot",
    "pearson",
]
