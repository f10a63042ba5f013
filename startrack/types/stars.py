"""Star-history data models."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from startrack.exceptions import ParseError
from startrack.ratelimit import RateLimitState


def parse_timestamp(value: Any) -> datetime:
    """Parse a GitHub ISO-8601 timestamp into an aware UTC datetime."""
    if not isinstance(value, str):
        raise ParseError(f"expected an ISO-8601 timestamp, got {value!r}")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ParseError(f"invalid timestamp {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class StargazerEvent:
    """One user starring a repository."""

    starred_at: datetime
    user_login: str | None = None

    @property
    def day(self) -> str:
        """UTC calendar day of the star, as ``YYYY-MM-DD``."""
        return self.starred_at.strftime("%Y-%m-%d")

    @classmethod
    def from_dict(cls, data: Any) -> "StargazerEvent":
        """
        Build an event from the ``application/vnd.github.v3.star+json`` shape.

        ``starred_at`` is required; ``user`` is optional.

        Raises:
            ParseError: If the payload does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ParseError(f"expected a stargazer object, got {type(data).__name__}")
        if "starred_at" not in data:
            raise ParseError("stargazer object is missing 'starred_at'")
        user = data.get("user")
        login = user.get("login") if isinstance(user, dict) else None
        return cls(starred_at=parse_timestamp(data["starred_at"]), user_login=login)


@dataclass
class StargazerPage:
    """A page of stargazer events plus the rate-limit budget it reported."""

    events: list[StargazerEvent]
    rate_limit: RateLimitState


@dataclass(frozen=True)
class StarSample:
    """A persisted day of star history for one repository."""

    login: str
    new_stars: int
    total_stars: int
    date: date


@dataclass(frozen=True)
class StarPoint:
    """One point of a downsampled star chart."""

    total_stars: int
    date: date


@dataclass
class LoginStars:
    """Downsampled star history of one repository."""

    login: str
    stars: list[StarPoint]
