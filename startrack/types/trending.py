"""Trending-related data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


@dataclass(frozen=True)
class TrendingEntry:
    """A named entry at a rank (1 = best) in a trending list."""

    name: str
    position: int


@dataclass
class TrendingSnapshot:
    """The current trending list for a language ("" is all languages)."""

    language: str
    content_hash: str
    entries: list[TrendingEntry]
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def find(self, name: str) -> TrendingEntry | None:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None


@dataclass(frozen=True)
class TrendingMarker:
    """Point in time at which a language's trending list changed."""

    language: str
    date: datetime


class ChangeKind(Enum):
    """How an entry's trending status changed."""

    REMOVED = "removed"
    NEW = "new"
    CHANGED = "changed"


@dataclass(frozen=True)
class TrendEvent:
    """A single notification-worthy change. Never persisted."""

    kind: ChangeKind
    name: str
    position: int
    language: str


@dataclass
class TrendingDiff:
    """Classification of an incoming trending list against the stored one."""

    removed: list[TrendingEntry] = field(default_factory=list)
    changed: list[TrendingEntry] = field(default_factory=list)
    new: list[TrendingEntry] = field(default_factory=list)

    def batches(self) -> list[tuple[ChangeKind, list[TrendingEntry]]]:
        """Non-empty change sets in dispatch order: removed, changed, new."""
        ordered = [
            (ChangeKind.REMOVED, self.removed),
            (ChangeKind.CHANGED, self.changed),
            (ChangeKind.NEW, self.new),
        ]
        return [(kind, entries) for kind, entries in ordered if entries]
