"""
startrack service.

Wires the GitHub client, the star history sync, the trending diff engine
and the forecaster around one repository and one notification sink.
"""

from datetime import date
from typing import Any

from startrack.config import GitHubConfig
from startrack.exceptions import NotFoundError
from startrack.github import GitHubClient
from startrack.locks import KeyedLock
from startrack.ports import JobQueue, NotificationSink, StarsRepository
from startrack.ratelimit import RateLimiter
from startrack.services import StarHistorySync, TrendingDiffEngine, TrendPredictor
from startrack.transport import RateLimitedFetcher
from startrack.types.github import GitHubAccount, GitHubOrganization, GitHubRepository
from startrack.types.stars import LoginStars, StarSample
from startrack.types.trending import (
    ChangeKind,
    TrendEvent,
    TrendingDiff,
    TrendingEntry,
    TrendingMarker,
)

SYNC_ALL_STARS = "sync_all_stars"


class StarsService:
    """
    Star tracking and trending watch for a set of organizations.

    Example:
        ```python
        import asyncio
        from startrack import StarsService
        from startrack.testing import InMemoryStarsRepository, RecordingNotificationSink

        async def main():
            async with StarsService.from_env(
                InMemoryStarsRepository(), RecordingNotificationSink()
            ) as service:
                await service.sync("octocat/hello-world")
                print(await service.predict_trending())

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        repository: StarsRepository,
        notifications: NotificationSink,
        queue: JobQueue | None = None,
        config: GitHubConfig | None = None,
        rate_limiter: RateLimiter | None = None,
        fetcher: RateLimitedFetcher | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            repository: Persistence for stars, trending lists and accounts
            notifications: In-app notification delivery
            queue: Producer for background sync jobs (optional)
            config: GitHub settings (default: anonymous access to api.github.com)
            rate_limiter: Shared rate limiter (optional)
            fetcher: Pre-built transport, overriding config and rate_limiter
        """
        self.repository = repository
        self.notifications = notifications
        self.queue = queue

        self._fetcher = fetcher or RateLimitedFetcher(config, rate_limiter)
        self.github = GitHubClient(self._fetcher)

        self.star_history = StarHistorySync(self.github, repository, KeyedLock())
        self.trending = TrendingDiffEngine(repository, notifications, KeyedLock())
        self.predictor = TrendPredictor(repository)

    @classmethod
    def from_env(
        cls,
        repository: StarsRepository,
        notifications: NotificationSink,
        queue: JobQueue | None = None,
    ) -> "StarsService":
        """
        Create a service configured from environment variables.

        See ``GitHubConfig.from_env`` for the variables read.

        Raises:
            ConfigurationError: If the environment holds invalid values
        """
        return cls(repository, notifications, queue, config=GitHubConfig.from_env())

    @property
    def fetcher(self) -> RateLimitedFetcher:
        """Get the underlying transport (for advanced use cases)."""
        return self._fetcher

    async def close(self) -> None:
        """Close the service and release resources."""
        await self._fetcher.close()

    async def __aenter__(self) -> "StarsService":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # Star history

    async def sync(self, login: str) -> list[StarSample]:
        return await self.star_history.sync(login)

    async def sync_process(self, login: str, page: int = 1) -> dict[str, int]:
        return await self.star_history.sync_process(login, page)

    async def create_stars(
        self, login: str, new_stars: int, total_stars: int, date: date
    ) -> StarSample:
        return await self.repository.create_stars(login, new_stars, total_stars, date)

    async def get_stars_by_login(self, login: str) -> list[StarSample]:
        return await self.star_history.get_stars_by_login(login)

    async def get_last_stars_by_login(self, login: str) -> StarSample | None:
        return await self.star_history.get_last_stars_by_login(login)

    async def get_stars(self, org_id: str) -> list[LoginStars]:
        return await self.star_history.get_stars(org_id)

    # Trending

    async def update_trending(
        self, language: str, content_hash: str, entries: list[TrendingEntry]
    ) -> TrendingDiff | None:
        return await self.trending.update_trending(language, content_hash, entries)

    async def inform(
        self, kind: ChangeKind, entries: list[TrendingEntry], language: str
    ) -> list[TrendEvent]:
        return await self.trending.inform(kind, entries, language)

    async def get_trending(self, language: str) -> list[TrendingMarker]:
        return await self.trending.get_trending(language)

    async def predict_trending(self) -> list[str]:
        return await self.predictor.predict_trending()

    # GitHub accounts

    async def get_github_repositories_by_org_id(self, org_id: str) -> list[GitHubAccount]:
        return await self.repository.get_github_repositories_by_org_id(org_id)

    async def get_all_github_repositories(self) -> list[GitHubAccount]:
        return await self.repository.get_all_github_repositories()

    async def add_github(self, org_id: str, code: str) -> GitHubAccount:
        """Connect a GitHub account to an organization from an OAuth code."""
        token = await self.github.exchange_code(code)
        return await self.repository.add_github(org_id, token)

    async def get_organizations(self, org_id: str, github_id: str) -> list[GitHubOrganization]:
        account = await self._get_account(org_id, github_id)
        return await self.github.get_organizations(account.token)

    async def get_repositories_of_organization(
        self, org_id: str, github_id: str, github: str
    ) -> list[GitHubRepository]:
        account = await self._get_account(org_id, github_id)
        return await self.github.get_organization_repositories(account.token, github)

    async def update_github_login(
        self, org_id: str, github_id: str, login: str
    ) -> GitHubAccount:
        """Choose the repository an account tracks and queue its first sync."""
        if self.queue is not None:
            self.queue.emit(SYNC_ALL_STARS, {"login": login})
        return await self.repository.update_github_login(org_id, github_id, login)

    async def delete_repository(self, org_id: str, github_id: str) -> None:
        await self.repository.delete_repository(org_id, github_id)

    async def _get_account(self, org_id: str, github_id: str) -> GitHubAccount:
        account = await self.repository.get_github_by_id(org_id, github_id)
        if account is None:
            raise NotFoundError(
                "GITHUB_NOT_FOUND", f"GitHub account {github_id} not found for {org_id}"
            )
        return account
