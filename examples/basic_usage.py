"""
Basic usage of startrack.

Syncs the star history of a repository, feeds two trending lists through
the diff engine and prints the forecast, using the in-memory collaborators.
"""

import asyncio
import logging

from startrack import StarsService, TrendingEntry, configure_logging
from startrack.testing import InMemoryStarsRepository, RecordingNotificationSink


async def main() -> None:
    configure_logging(level=logging.INFO)

    repository = InMemoryStarsRepository()
    notifications = RecordingNotificationSink()
    repository.track("my-org", "octocat/Hello-World")

    async with StarsService.from_env(repository, notifications) as service:
        samples = await service.sync("octocat/Hello-World")
        if samples:
            print(f"{samples[-1].total_stars} stars as of {samples[-1].date}")

        await service.update_trending("", "first", [TrendingEntry("octocat/Hello-World", 4)])
        await service.update_trending("", "second", [TrendingEntry("octocat/Hello-World", 1)])
        for notification in notifications.notifications:
            print(f"[{notification.org_id}] {notification.subject}: {notification.message}")

        print("next trending changes:", (await service.predict_trending())[:3])


if __name__ == "__main__":
    asyncio.run(main())
