"""startrack testing utilities.

Provides in-memory collaborators and fixtures for testing code built on startrack.
"""

from startrack.testing.mock import (
    FakeClock,
    FakeEventSource,
    InMemoryStarsRepository,
    MockCall,
    Notification,
    RecordingJobQueue,
    RecordingNotificationSink,
    paginate,
    stars_on,
)

__all__ = [
    # Collaborators
    "InMemoryStarsRepository",
    "RecordingNotificationSink",
    "RecordingJobQueue",
    "FakeEventSource",
    "FakeClock",
    "MockCall",
    "Notification",
    # Helper functions
    "stars_on",
    "paginate",
]
