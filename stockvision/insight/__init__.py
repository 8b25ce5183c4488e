"""Advisory text built on top of the metrics snapshot."""

from stockvision.insight.heuristic import Insight, build_heuristic_insight

__all__ = ["Insight", "build_heuristic_insight"]
