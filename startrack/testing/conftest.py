"""
Pytest plugin for startrack testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["startrack.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from startrack.testing.fixtures import (
    fake_clock,
    job_queue,
    notification_sink,
    sample_trending,
    stars_repository,
    trend_predictor,
    trending_engine,
)

__all__ = [
    "fake_clock",
    "stars_repository",
    "notification_sink",
    "job_queue",
    "trending_engine",
    "trend_predictor",
    "sample_trending",
]
