"""
Star history synchronization.

Pages through a repository's stargazers, buckets the stars per UTC day and
writes a cumulative series, oldest day first.
"""

from collections import Counter
from collections.abc import Iterable
from datetime import date

from startrack.locks import KeyedLock
from startrack.logging import get_logger
from startrack.ports import StargazerEventSource, StarsRepository
from startrack.types.stars import LoginStars, StargazerEvent, StarPoint, StarSample

logger = get_logger("sync")

PAGE_SIZE = 100


def aggregate_by_date(events: Iterable[StargazerEvent]) -> dict[str, int]:
    """Count events per UTC day (``YYYY-MM-DD``)."""
    return dict(Counter(event.day for event in events))


def merge_counts(first: dict[str, int], second: dict[str, int]) -> dict[str, int]:
    """Union of both day maps; days present in both are summed."""
    return {
        day: first.get(day, 0) + second.get(day, 0)
        for day in first.keys() | second.keys()
    }


def downsample(samples: list[StarSample]) -> list[StarPoint]:
    """
    Reduce a star series to roughly ten chart points.

    Series shorter than ten samples collapse into one point; longer ones are
    cut into chunks of ``len // 10`` samples. Each chunk contributes its last
    sample.
    """
    if not samples:
        return []
    size = len(samples) if len(samples) < 10 else len(samples) // 10
    return [
        StarPoint(total_stars=chunk[-1].total_stars, date=chunk[-1].date)
        for chunk in (samples[i:i + size] for i in range(0, len(samples), size))
    ]


class StarHistorySync:
    """Builds and persists the day-by-day star history of repositories."""

    def __init__(
        self,
        source: StargazerEventSource,
        repository: StarsRepository,
        locks: KeyedLock | None = None,
        page_size: int = PAGE_SIZE,
    ) -> None:
        """
        Initialize the sync.

        Args:
            source: Where stargazer pages come from (usually a GitHubClient)
            repository: Star history persistence
            locks: Per-login locks; share one instance between all syncs of a process
            page_size: Events per page; a full page means another page follows
        """
        self.source = source
        self.repository = repository
        self.locks = locks or KeyedLock()
        self.page_size = page_size

    async def sync_process(self, login: str, page: int = 1) -> dict[str, int]:
        """
        Count the stars of ``login`` per day, starting at ``page``.

        Pages are fetched one after another. A page holding exactly
        ``page_size`` events means there may be more; anything shorter ends
        the walk. A day split across a page boundary is summed.

        Args:
            login: Repository as "owner/name"
            page: First page to fetch (1-based)

        Returns:
            Mapping of ``YYYY-MM-DD`` to the number of stars that day

        Raises:
            StarTrackError: If any page fails to load or parse
        """
        counts: dict[str, int] = {}
        while True:
            result = await self.source.get_stargazer_events(login, page, self.page_size)
            counts = merge_counts(counts, aggregate_by_date(result.events))
            logger.debug(
                "%s page %d: %d stars, %d days so far",
                login, page, len(result.events), len(counts),
            )
            if len(result.events) != self.page_size:
                return counts
            page += 1

    async def sync(self, login: str) -> list[StarSample]:
        """
        Rebuild and persist the full star history of ``login``.

        Every page is fetched before anything is written. Samples are then
        written one at a time in date order so that an interrupted write
        leaves a valid prefix of the series. Syncs of the same login are
        serialized.

        Args:
            login: Repository as "owner/name"

        Returns:
            The samples written, oldest first
        """
        async with self.locks.hold(login):
            counts = await self.sync_process(login)
            logger.info("syncing %d days of stars for %s", len(counts), login)

            samples: list[StarSample] = []
            total = 0
            for day in sorted(counts, key=date.fromisoformat):
                total += counts[day]
                sample = await self.repository.create_stars(
                    login, counts[day], total, date.fromisoformat(day)
                )
                samples.append(sample)
            return samples

    async def get_stars_by_login(self, login: str) -> list[StarSample]:
        return await self.repository.get_stars_by_login(login)

    async def get_last_stars_by_login(self, login: str) -> StarSample | None:
        return await self.repository.get_last_stars_by_login(login)

    async def get_stars(self, org_id: str) -> list[LoginStars]:
        """
        Chart-sized star history of every repository an organization tracks.

        Accounts that have not picked a repository yet are skipped.
        """
        result = []
        for account in await self.repository.get_github_repositories_by_org_id(org_id):
            if not account.login:
                continue
            samples = await self.repository.get_stars_by_login(account.login)
            result.append(LoginStars(login=account.login, stars=downsample(samples)))
        return result
