"""
Trending list change detection and notification fan-out.
"""

from startrack.exceptions import NotificationDeliveryError
from startrack.locks import KeyedLock
from startrack.logging import get_logger
from startrack.ports import NotificationSink, StarsRepository
from startrack.types.trending import (
    ChangeKind,
    TrendEvent,
    TrendingDiff,
    TrendingEntry,
    TrendingMarker,
    TrendingSnapshot,
)

logger = get_logger("trending")

MAIN_FEED = "the main feed"


def diff_trending(
    current: TrendingSnapshot | None, entries: list[TrendingEntry]
) -> TrendingDiff:
    """
    Classify ``entries`` against the stored snapshot.

    Removed entries are old names missing from the new list. Changed entries
    are new entries whose name was listed before at another position; they
    carry the new position. New entries are names the stored list does not
    hold at all, which is everything when nothing is stored.
    """
    if current is None:
        return TrendingDiff(new=list(entries))

    incoming = {entry.name for entry in entries}
    removed = [entry for entry in current.entries if entry.name not in incoming]

    changed = []
    for entry in entries:
        previous = current.find(entry.name)
        if previous is not None and previous.position != entry.position:
            changed.append(entry)

    listed = {entry.name for entry in current.entries}
    new = [entry for entry in entries if entry.name not in listed]

    return TrendingDiff(removed=removed, changed=changed, new=new)


def render_notification(event: TrendEvent) -> tuple[str, str]:
    """Subject and message for a trending change."""
    where = event.language or MAIN_FEED
    if event.kind is ChangeKind.REMOVED:
        return (
            f"{event.name} is not trending on GitHub anymore",
            f"{event.name} is not trending anymore in {where}",
        )
    if event.kind is ChangeKind.NEW:
        return (
            f"{event.name} is trending on GitHub",
            f"{event.name} is trending in {where} position #{event.position}",
        )
    return (
        f"{event.name} changed trending position on GitHub",
        f"{event.name} changed position in {where} to position #{event.position}",
    )


class TrendingDiffEngine:
    """Keeps the current trending list per language and reports what moved."""

    def __init__(
        self,
        repository: StarsRepository,
        notifications: NotificationSink,
        locks: KeyedLock | None = None,
    ) -> None:
        self.repository = repository
        self.notifications = notifications
        self.locks = locks or KeyedLock()

    async def update_trending(
        self, language: str, content_hash: str, entries: list[TrendingEntry]
    ) -> TrendingDiff | None:
        """
        Replace the trending list of ``language`` and notify followers.

        Republishing a list with the stored hash is a no-op. Otherwise a
        boundary marker is written, the lists are compared, removed, changed
        and new entries are announced in that order and the new list becomes
        current. Updates of one language are serialized.

        Args:
            language: Trending language, "" for all languages
            content_hash: Fingerprint of ``entries``
            entries: The new ranked list

        Returns:
            The diff, or None when the list was unchanged

        Raises:
            NotificationDeliveryError: If some organizations could not be
                notified; the new list has been stored regardless
        """
        async with self.locks.hold(language):
            current = await self.repository.get_trending_by_language(language)
            if current is not None and current.content_hash == content_hash:
                logger.debug("trending for %r unchanged (%s)", language, content_hash)
                return None

            await self.repository.new_trending(language)
            diff = diff_trending(current, entries)
            logger.info(
                "trending for %r: %d removed, %d changed, %d new",
                language, len(diff.removed), len(diff.changed), len(diff.new),
            )

            failures: list[tuple[str, Exception]] = []
            for kind, batch in diff.batches():
                try:
                    await self.inform(kind, batch, language)
                except NotificationDeliveryError as e:
                    failures.extend(e.failures)

            await self.repository.replace_or_add_trending(language, content_hash, entries)

            if failures:
                raise NotificationDeliveryError(failures)
            return diff

    async def inform(
        self, kind: ChangeKind, entries: list[TrendingEntry], language: str
    ) -> list[TrendEvent]:
        """
        Notify every organization following a tracked entry of a change.

        Names no organization tracks are skipped. A failed delivery does not
        stop the others.

        Returns:
            The events that were delivered to at least one organization

        Raises:
            NotificationDeliveryError: After the batch, if any delivery failed
        """
        by_name = {entry.name: entry for entry in entries}
        accounts = await self.repository.get_githubs_by_names(list(by_name))

        resolved = {account.login for account in accounts if account.login in by_name}
        for name in by_name.keys() - resolved:
            logger.debug("skipping untracked trending entry %r", name)

        delivered: list[TrendEvent] = []
        failures: list[tuple[str, Exception]] = []
        for entry in entries:
            if entry.name not in resolved:
                continue

            event = TrendEvent(
                kind=kind, name=entry.name, position=entry.position, language=language
            )
            subject, message = render_notification(event)
            sent = False
            for org_id in await self.repository.get_organizations_by_github_login(entry.name):
                try:
                    await self.notifications.in_app_notification(org_id, subject, message, True)
                except Exception as e:
                    logger.warning("failed to notify %s about %s: %s", org_id, entry.name, e)
                    failures.append((org_id, e))
                else:
                    sent = True
            if sent:
                delivered.append(event)

        if failures:
            raise NotificationDeliveryError(failures)
        return delivered

    async def get_trending(self, language: str) -> list[TrendingMarker]:
        """Boundary markers of ``language``, oldest first."""
        return await self.repository.get_trending_history(language)
