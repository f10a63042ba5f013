"""
startrack configuration.

All settings are passed explicitly at construction. ``GitHubConfig.from_env``
is the only place that reads the process environment.
"""

import os
from dataclasses import dataclass

from startrack.exceptions import ConfigurationError


@dataclass
class GitHubConfig:
    """Settings for talking to GitHub."""

    auth_token: str | None = None  # Elevates the REST rate limit when set
    base_url: str = "https://api.github.com"
    oauth_url: str = "https://github.com"
    client_id: str | None = None
    client_secret: str | None = None
    frontend_url: str | None = None
    timeout: float = 30.0

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_OAUTH_URL = "https://github.com"

    @classmethod
    def from_env(cls) -> "GitHubConfig":
        """
        Create a configuration from environment variables.

        Environment variables:
            GITHUB_AUTH: Personal access token (optional)
            GITHUB_API_URL: REST API base URL (optional, default: https://api.github.com)
            GITHUB_OAUTH_URL: OAuth host (optional, default: https://github.com)
            GITHUB_CLIENT_ID: OAuth app client id (optional)
            GITHUB_CLIENT_SECRET: OAuth app client secret (optional)
            FRONTEND_URL: Frontend origin used for the OAuth redirect (optional)
            STARTRACK_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Returns:
            Configured GitHubConfig instance

        Raises:
            ConfigurationError: If STARTRACK_TIMEOUT is not a positive number
        """
        timeout_str = os.environ.get("STARTRACK_TIMEOUT")
        timeout = 30.0
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid STARTRACK_TIMEOUT: {timeout_str!r}. Must be a number"
                ) from None
            if timeout <= 0:
                raise ConfigurationError("STARTRACK_TIMEOUT must be positive")

        return cls(
            auth_token=os.environ.get("GITHUB_AUTH") or None,
            base_url=os.environ.get("GITHUB_API_URL", cls.DEFAULT_BASE_URL),
            oauth_url=os.environ.get("GITHUB_OAUTH_URL", cls.DEFAULT_OAUTH_URL),
            client_id=os.environ.get("GITHUB_CLIENT_ID") or None,
            client_secret=os.environ.get("GITHUB_CLIENT_SECRET") or None,
            frontend_url=os.environ.get("FRONTEND_URL") or None,
            timeout=timeout,
        )

    def auth_headers(self, token: str | None = None) -> dict[str, str]:
        """Build the Authorization header for ``token`` or the configured one."""
        token = token or self.auth_token
        if not token:
            return {}
        return {"Authorization": f"token {token}"}
