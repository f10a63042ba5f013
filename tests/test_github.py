"""
Tests for the GitHub client and its response parsing.

Feature: startrack
"""

import asyncio
import json
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from startrack.config import GitHubConfig
from startrack.exceptions import AuthenticationError, ConfigurationError, ParseError
from startrack.github import GitHubClient
from startrack.ratelimit import RateLimiter
from startrack.testing import FakeClock
from startrack.transport import RateLimitedFetcher
from startrack.types.stars import StargazerEvent

timestamp_strategy = st.datetimes(
    min_value=datetime(2010, 1, 1),
    max_value=datetime(2030, 1, 1),
)


def make_iso_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO format with Z suffix."""
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def make_client(body: Any, config: GitHubConfig | None = None, status: int = 200) -> tuple[GitHubClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            status,
            json=body,
            headers={"x-ratelimit-remaining": "4321", "x-ratelimit-reset": "1700000000"},
        )

    clock = FakeClock()
    fetcher = RateLimitedFetcher(
        config=config or GitHubConfig(),
        rate_limiter=RateLimiter(clock=clock.time, sleep=clock.sleep),
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    return GitHubClient(fetcher), seen


@given(when=timestamp_strategy)
@settings(max_examples=100)
def test_stargazer_day_is_utc_calendar_day(when: datetime) -> None:
    event = StargazerEvent.from_dict({"starred_at": make_iso_timestamp(when), "user": {"login": "x"}})

    assert event.starred_at.tzinfo is not None
    assert event.day == when.strftime("%Y-%m-%d")


def test_stargazer_offset_timestamp_is_bucketed_in_utc() -> None:
    event = StargazerEvent.from_dict({"starred_at": "2024-03-01T23:30:00-02:00"})

    assert event.day == "2024-03-02"
    assert event.user_login is None


@pytest.mark.parametrize(
    "payload",
    [
        "2024-01-01T00:00:00Z",
        {"user": {"login": "x"}},
        {"starred_at": "yesterday"},
        {"starred_at": 1700000000},
    ],
)
def test_unexpected_stargazer_shapes_are_parse_errors(payload: Any) -> None:
    with pytest.raises(ParseError):
        StargazerEvent.from_dict(payload)


def test_get_stargazer_events_parses_page() -> None:
    body = [
        {"starred_at": "2024-01-01T10:00:00Z", "user": {"login": "alice"}},
        {"starred_at": "2024-01-02T11:00:00Z", "user": {"login": "bob"}},
    ]
    client, seen = make_client(body)

    page = asyncio.run(client.get_stargazer_events("acme/rocket", page=3))

    assert [e.user_login for e in page.events] == ["alice", "bob"]
    assert page.rate_limit.remaining == 4321
    assert seen[0].url.path == "/repos/acme/rocket/stargazers"
    assert seen[0].url.params["page"] == "3"
    assert seen[0].url.params["per_page"] == "100"


def test_get_stargazer_events_rejects_non_list() -> None:
    client, _ = make_client({"message": "Moved Permanently"})

    with pytest.raises(ParseError):
        asyncio.run(client.get_stargazer_events("acme/rocket"))


def test_get_organizations_uses_account_token() -> None:
    client, seen = make_client(
        [{"id": 1, "login": "acme", "description": None}],
        GitHubConfig(auth_token="ghp_service"),
    )

    orgs = asyncio.run(client.get_organizations("gho_user"))

    assert orgs[0].login == "acme"
    assert seen[0].url.path == "/user/orgs"
    assert seen[0].headers["Authorization"] == "token gho_user"


def test_account_listings_never_fall_back_to_service_token() -> None:
    client, seen = make_client([], GitHubConfig(auth_token="ghp_service"))

    with pytest.raises(AuthenticationError):
        asyncio.run(client.get_organizations(None))
    with pytest.raises(AuthenticationError):
        asyncio.run(client.get_organization_repositories("", "acme"))

    assert seen == []


def test_get_organization_repositories() -> None:
    client, seen = make_client(
        [{"name": "rocket", "full_name": "acme/rocket", "stargazers_count": 42}]
    )

    repos = asyncio.run(client.get_organization_repositories("gho_user", "acme"))

    assert repos[0].full_name == "acme/rocket"
    assert repos[0].stargazers_count == 42
    assert seen[0].url.path == "/orgs/acme/repos"
    assert "ghp_service" not in seen[0].headers.get("Authorization", "")


def test_get_organizations_rejects_bad_items() -> None:
    client, _ = make_client([{"login": "acme"}])

    with pytest.raises(ParseError):
        asyncio.run(client.get_organizations("gho_user"))


def test_exchange_code_posts_app_credentials() -> None:
    config = GitHubConfig(
        auth_token="ghp_service",
        client_id="cid",
        client_secret="csecret",
        frontend_url="https://app.test/",
    )
    client, seen = make_client({"access_token": "gho_new"}, config)

    token = asyncio.run(client.exchange_code("abc"))

    assert token == "gho_new"
    request = seen[0]
    assert str(request.url) == "https://github.com/login/oauth/access_token"
    assert request.method == "POST"
    assert "Authorization" not in request.headers
    assert json.loads(request.content) == {
        "client_id": "cid",
        "client_secret": "csecret",
        "code": "abc",
        "redirect_uri": "https://app.test/settings",
    }


def test_exchange_code_without_token_fails() -> None:
    config = GitHubConfig(client_id="cid", client_secret="csecret")
    client, _ = make_client({"error": "bad_verification_code", "error_description": "expired"}, config)

    with pytest.raises(AuthenticationError) as excinfo:
        asyncio.run(client.exchange_code("abc"))

    assert excinfo.value.message == "expired"


def test_exchange_code_requires_app_credentials() -> None:
    client, seen = make_client({"access_token": "gho_new"})

    with pytest.raises(ConfigurationError):
        asyncio.run(client.exchange_code("abc"))

    assert seen == []


def test_event_timezone_is_utc() -> None:
    event = StargazerEvent.from_dict({"starred_at": "2024-01-01T00:00:00"})

    assert event.starred_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
