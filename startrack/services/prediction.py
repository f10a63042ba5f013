"""
Forecast of upcoming trending dates.

A moving average of the gaps between past trending boundaries: each
forecast date is appended to the history and feeds the next average. This
is a heuristic with no confidence bounds.
"""

from datetime import datetime, timedelta

from startrack.ports import StarsRepository

MAX_DEPTH = 500
FORECAST_FORMAT = "%Y-%m-%dT%H:%M:00"


def intervals_in_days(dates: list[datetime]) -> list[float]:
    """Gaps between consecutive dates, in fractional days."""
    return [
        (later - earlier) / timedelta(days=1)
        for earlier, later in zip(dates, dates[1:])
    ]


def predict_trending_loop(
    dates: list[datetime], current: int = 0, max_depth: int = MAX_DEPTH
) -> list[datetime]:
    """
    Project future trending dates from past ones.

    The next date is the last known date plus the mean of every gap so far,
    synthesized ones included. Projection stops after the step at depth
    ``max_depth``, or immediately when there are fewer than two dates, the
    mean gap is not positive or the next date would fall past ``datetime.max``.

    Args:
        dates: Past trending dates, oldest first
        current: Depth to start counting from
        max_depth: Last depth that still emits a date

    Returns:
        Forecast dates, strictly increasing
    """
    history = list(dates)
    gaps = intervals_in_days(history)
    forecast: list[datetime] = []
    while gaps and current <= max_depth:
        mean = sum(gaps) / len(gaps)
        if mean <= 0:
            break
        try:
            next_date = history[-1] + timedelta(days=mean)
        except OverflowError:
            break
        forecast.append(next_date)
        gaps.append(mean)
        history.append(next_date)
        current += 1
    return forecast


class TrendPredictor:
    """Forecasts when the main trending feed is likely to change next."""

    def __init__(self, repository: StarsRepository, max_depth: int = MAX_DEPTH) -> None:
        self.repository = repository
        self.max_depth = max_depth

    async def predict_trending_dates(self, language: str = "") -> list[datetime]:
        markers = await self.repository.get_trending_history(language)
        return predict_trending_loop(
            [marker.date for marker in markers], max_depth=self.max_depth
        )

    async def predict_trending(self) -> list[str]:
        """Forecast dates of the main feed, formatted ``YYYY-MM-DDTHH:MM:00``."""
        return [d.strftime(FORECAST_FORMAT) for d in await self.predict_trending_dates()]
