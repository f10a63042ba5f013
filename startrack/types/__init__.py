"""startrack type definitions.

This module exports all data model types used by the package.
"""

from startrack.types.github import GitHubAccount, GitHubOrganization, GitHubRepository
from startrack.types.stars import (
    LoginStars,
    StargazerEvent,
    StargazerPage,
    StarPoint,
    StarSample,
)
from startrack.types.trending import (
    ChangeKind,
    TrendEvent,
    TrendingDiff,
    TrendingEntry,
    TrendingMarker,
    TrendingSnapshot,
)

__all__ = [
    # Star history
    "StargazerEvent",
    "StargazerPage",
    "StarSample",
    "StarPoint",
    "LoginStars",
    # Trending
    "TrendingEntry",
    "TrendingSnapshot",
    "TrendingMarker",
    "TrendingDiff",
    "TrendEvent",
    "ChangeKind",
    # GitHub accounts
    "GitHubAccount",
    "GitHubOrganization",
    "GitHubRepository",
]
