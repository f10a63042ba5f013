"""
Pytest fixtures for startrack testing.

Provides common fixtures for tests of applications built on startrack.
"""

from collections.abc import Generator
from datetime import datetime, timezone

import pytest

from startrack.locks import KeyedLock
from startrack.services.prediction import TrendPredictor
from startrack.services.trending import TrendingDiffEngine
from startrack.testing.mock import (
    FakeClock,
    InMemoryStarsRepository,
    RecordingJobQueue,
    RecordingNotificationSink,
)
from startrack.types.trending import TrendingEntry


# ============================================================================
# Collaborator Fixtures
# ============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock starting at 2024-01-01T00:00:00Z."""
    return FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def stars_repository(fake_clock: FakeClock) -> Generator[InMemoryStarsRepository, None, None]:
    """
    Provide an empty in-memory repository stamped by ``fake_clock``.

    Example:
        ```python
        def test_my_feature(stars_repository):
            stars_repository.track("org-1", "octocat/hello-world")
            ...
            assert stars_repository.was_called("create_stars")
        ```
    """
    repository = InMemoryStarsRepository(clock=lambda: fake_clock.now)
    yield repository
    repository.reset()


@pytest.fixture
def notification_sink() -> RecordingNotificationSink:
    """Provide a notification sink that records deliveries."""
    return RecordingNotificationSink()


@pytest.fixture
def job_queue() -> RecordingJobQueue:
    """Provide a job queue that records emitted jobs."""
    return RecordingJobQueue()


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def trending_engine(
    stars_repository: InMemoryStarsRepository,
    notification_sink: RecordingNotificationSink,
) -> TrendingDiffEngine:
    """Provide a diff engine wired to the in-memory collaborators."""
    return TrendingDiffEngine(stars_repository, notification_sink, KeyedLock())


@pytest.fixture
def trend_predictor(stars_repository: InMemoryStarsRepository) -> TrendPredictor:
    """Provide a forecaster reading from the in-memory repository."""
    return TrendPredictor(stars_repository)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_trending() -> list[TrendingEntry]:
    """Provide a three-entry trending list."""
    return [
        TrendingEntry(name="acme/rocket", position=1),
        TrendingEntry(name="acme/anvil", position=2),
        TrendingEntry(name="acme/magnet", position=3),
    ]
