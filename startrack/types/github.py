"""GitHub account and listing models."""

from dataclasses import dataclass
from typing import Any

from startrack.exceptions import ParseError


@dataclass
class GitHubAccount:
    """A GitHub connection tracked on behalf of an organization."""

    id: str
    organization_id: str
    login: str | None = None  # "owner/repo" once chosen
    token: str | None = None


@dataclass(frozen=True)
class GitHubOrganization:
    """An organization visible to a GitHub token."""

    id: int
    login: str
    description: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "GitHubOrganization":
        if not isinstance(data, dict):
            raise ParseError(f"expected an organization object, got {type(data).__name__}")
        try:
            return cls(
                id=int(data["id"]),
                login=str(data["login"]),
                description=data.get("description"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(f"invalid organization object: {e}") from e


@dataclass(frozen=True)
class GitHubRepository:
    """A repository listed under an organization."""

    name: str
    full_name: str
    stargazers_count: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "GitHubRepository":
        if not isinstance(data, dict):
            raise ParseError(f"expected a repository object, got {type(data).__name__}")
        try:
            return cls(
                name=str(data["name"]),
                full_name=str(data["full_name"]),
                stargazers_count=int(data.get("stargazers_count") or 0),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(f"invalid repository object: {e}") from e
