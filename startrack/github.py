"""
GitHub REST client.

Parses the handful of GitHub endpoints startrack needs into typed models,
treating any unexpected shape as a ``ParseError``.
"""

from typing import Any

from startrack.config import GitHubConfig
from startrack.exceptions import AuthenticationError, ConfigurationError, ParseError
from startrack.ratelimit import RateLimitState
from startrack.transport import RateLimitedFetcher
from startrack.types.github import GitHubOrganization, GitHubRepository
from startrack.types.stars import StargazerEvent, StargazerPage


class GitHubClient:
    """Client for stargazers, organizations and the OAuth code exchange."""

    PAGE_SIZE = 100

    def __init__(self, fetcher: RateLimitedFetcher) -> None:
        """
        Initialize the GitHub client.

        Args:
            fetcher: Rate-limited transport for making requests
        """
        self.fetcher = fetcher

    @property
    def config(self) -> GitHubConfig:
        return self.fetcher.config

    async def get_stargazer_events(
        self,
        login: str,
        page: int = 1,
        per_page: int = PAGE_SIZE,
    ) -> StargazerPage:
        """
        Get one page of stargazers of a repository, with star timestamps.

        Args:
            login: Repository as "owner/name"
            page: 1-based page number
            per_page: Page size (GitHub caps this at 100)

        Returns:
            StargazerPage with the events and the rate-limit budget left

        Raises:
            ParseError: If the body is not a list of stargazer objects
        """
        response = await self.fetcher.fetch(
            f"/repos/{login}/stargazers",
            params={"page": page, "per_page": per_page},
        )
        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"invalid JSON in stargazers page {page} of {login}") from e

        if not isinstance(data, list):
            raise ParseError(
                f"expected a list of stargazers for {login}, got {type(data).__name__}"
            )

        return StargazerPage(
            events=[StargazerEvent.from_dict(item) for item in data],
            rate_limit=RateLimitState.from_headers(response.headers),
        )

    async def get_organizations(self, token: str | None) -> list[GitHubOrganization]:
        """
        List the organizations visible to a user token.

        Args:
            token: OAuth access token of the connected GitHub account

        Raises:
            AuthenticationError: If the account has no token; the service
                token is never used in its place
        """
        data = await self.fetcher.fetch_json(
            "/user/orgs", headers=self._token_headers(token), authenticate=False
        )
        return [GitHubOrganization.from_dict(item) for item in _expect_list(data, "organizations")]

    async def get_organization_repositories(
        self, token: str | None, organization: str
    ) -> list[GitHubRepository]:
        """
        List the repositories of a GitHub organization.

        Args:
            token: OAuth access token of the connected GitHub account
            organization: Organization login
        """
        data = await self.fetcher.fetch_json(
            f"/orgs/{organization}/repos", headers=self._token_headers(token), authenticate=False
        )
        return [GitHubRepository.from_dict(item) for item in _expect_list(data, "repositories")]

    async def exchange_code(self, code: str) -> str:
        """
        Exchange an OAuth authorization code for an access token.

        Args:
            code: Code GitHub handed to the redirect URL

        Returns:
            The access token

        Raises:
            ConfigurationError: If the OAuth app credentials are not configured
            AuthenticationError: If GitHub did not return a token
        """
        config = self.config
        if not config.client_id or not config.client_secret:
            raise ConfigurationError("GitHub OAuth client id and secret are required")

        body: dict[str, Any] = {
            "client_id": config.client_id,
            "client_secret": config.client_secret,
            "code": code,
        }
        if config.frontend_url:
            body["redirect_uri"] = f"{config.frontend_url.rstrip('/')}/settings"

        data = await self.fetcher.fetch_json(
            f"{config.oauth_url.rstrip('/')}/login/oauth/access_token",
            method="POST",
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            json=body,
            authenticate=False,
        )
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            error = data.get("error_description") if isinstance(data, dict) else None
            raise AuthenticationError(
                "OAUTH_EXCHANGE_FAILED", error or "GitHub did not return an access token"
            )
        return token

    def _token_headers(self, token: str | None) -> dict[str, str]:
        if not token:
            raise AuthenticationError(
                "MISSING_TOKEN", "the GitHub account has no access token"
            )
        return {"Accept": "application/vnd.github+json", "Authorization": f"token {token}"}


def _expect_list(data: Any, what: str) -> list[Any]:
    if not isinstance(data, list):
        raise ParseError(f"expected a list of {what}, got {type(data).__name__}")
    return data
