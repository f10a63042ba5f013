"""startrack - GitHub star history and trending watch."""

from startrack.config import GitHubConfig
from startrack.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    NotFoundError,
    NotificationDeliveryError,
    ParseError,
    RateLimitedError,
    ServerError,
    StarTrackError,
    TransportError,
    ValidationError,
)
from startrack.github import GitHubClient
from startrack.locks import KeyedLock
from startrack.logging import configure_logging, get_logger
from startrack.ratelimit import RateLimiter, RateLimitState
from startrack.service import StarsService
from startrack.services import StarHistorySync, TrendingDiffEngine, TrendPredictor
from startrack.transport import RateLimitedFetcher
from startrack.types import (
    ChangeKind,
    StarSample,
    TrendEvent,
    TrendingDiff,
    TrendingEntry,
    TrendingSnapshot,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main service
    "StarsService",
    # Components
    "StarHistorySync",
    "TrendingDiffEngine",
    "TrendPredictor",
    "GitHubClient",
    "KeyedLock",
    # Transport
    "RateLimitedFetcher",
    "RateLimiter",
    "RateLimitState",
    # Configuration
    "GitHubConfig",
    # Models
    "StarSample",
    "TrendingEntry",
    "TrendingSnapshot",
    "TrendingDiff",
    "TrendEvent",
    "ChangeKind",
    # Exceptions
    "StarTrackError",
    "ConfigurationError",
    "TransportError",
    "ParseError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "NotificationDeliveryError",
    # Logging
    "configure_logging",
    "get_logger",
]
