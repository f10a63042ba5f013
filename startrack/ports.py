"""
Collaborator interfaces.

startrack does not own storage, notification delivery or job scheduling.
These protocols describe what the services need from them; in-memory
implementations live in ``startrack.testing``.
"""

from datetime import date
from typing import Any, Protocol

from startrack.types.github import GitHubAccount
from startrack.types.stars import StargazerPage, StarSample
from startrack.types.trending import TrendingEntry, TrendingMarker, TrendingSnapshot


class StargazerEventSource(Protocol):
    """Anything that can serve pages of stargazer events."""

    async def get_stargazer_events(
        self, login: str, page: int = 1, per_page: int = 100
    ) -> StargazerPage: ...


class StarsRepository(Protocol):
    """Persistence for star history, trending snapshots and GitHub accounts."""

    # Star history (append-only)
    async def create_stars(
        self, login: str, new_stars: int, total_stars: int, date: date
    ) -> StarSample: ...

    async def get_stars_by_login(self, login: str) -> list[StarSample]: ...

    async def get_last_stars_by_login(self, login: str) -> StarSample | None: ...

    # Trending
    async def get_trending_by_language(self, language: str) -> TrendingSnapshot | None: ...

    async def new_trending(self, language: str) -> TrendingMarker: ...

    async def replace_or_add_trending(
        self, language: str, content_hash: str, entries: list[TrendingEntry]
    ) -> TrendingSnapshot: ...

    async def get_trending_history(self, language: str) -> list[TrendingMarker]:
        """Boundary markers for ``language``, oldest first."""
        ...

    # Tracked identities
    async def get_githubs_by_names(self, names: list[str]) -> list[GitHubAccount]: ...

    async def get_organizations_by_github_login(self, login: str) -> list[str]:
        """Ids of the organizations following ``login``."""
        ...

    async def get_github_repositories_by_org_id(self, org_id: str) -> list[GitHubAccount]: ...

    async def get_all_github_repositories(self) -> list[GitHubAccount]: ...

    async def add_github(self, org_id: str, token: str) -> GitHubAccount: ...

    async def get_github_by_id(self, org_id: str, github_id: str) -> GitHubAccount | None: ...

    async def update_github_login(
        self, org_id: str, github_id: str, login: str
    ) -> GitHubAccount: ...

    async def delete_repository(self, org_id: str, github_id: str) -> None: ...


class NotificationSink(Protocol):
    """In-app notification delivery. Fire and forget."""

    async def in_app_notification(
        self, org_id: str, subject: str, message: str, send_email: bool = False
    ) -> None: ...


class JobQueue(Protocol):
    """Background job producer."""

    def emit(self, pattern: str, payload: dict[str, Any]) -> None: ...
