"""Star history, trending diff and trending forecast services."""

from startrack.services.prediction import TrendPredictor
from startrack.services.stars import StarHistorySync
from startrack.services.trending import TrendingDiffEngine

__all__ = [
    "StarHistorySync",
    "TrendingDiffEngine",
    "TrendPredictor",
]
