# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - FakeGitHub: an in-process stand-in for the GitHub API built on
#   httpx.MockTransport, which records every request it receives
# - An app/TestClient pair wired to FakeGitHub and a controllable clock
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from lib.analytics import RepoAnalytics
from lib.cache import ContributorCache
from lib.github_client import GitHubClient

API_BASE = "https://api.github.test"
AVATAR_HOST = "avatars.github.test"


# =============================================================================
# Fake Upstream
# =============================================================================

class FakeGitHub:
    """
    Minimal GitHub API double.

    - repos: "owner/name" -> list of contributor payloads
    - statuses: "owner/name" -> forced HTTP status for every API call
    - failing_avatars: avatar URLs that answer 500
    - endless: every contributors page returns data (pagination never ends)
    """

    def __init__(self):
        self.repos: dict[str, list[dict]] = {}
        self.metadata: dict[str, dict] = {}
        self.statuses: dict[str, int] = {}
        self.failing_avatars: set[str] = set()
        self.endless = False
        self.requests: list[httpx.Request] = []

    def add_repo(self, repo: str, count: int, prefix: str = "user") -> list[dict]:
        contributors = [
            {
                "login": f"{prefix}{i}",
                "html_url": f"https://github.com/{prefix}{i}",
                "avatar_url": f"https://{AVATAR_HOST}/u/{prefix}{i}",
                "contributions": 1000 - i,
            }
            for i in range(count)
        ]
        self.repos[repo] = contributors
        return contributors

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host == AVATAR_HOST:
            if str(request.url) in self.failing_avatars:
                return httpx.Response(500)
            return httpx.Response(
                200,
                content=f"PNG:{request.url.path}".encode(),
                headers={"content-type": "image/png"},
            )

        parts = request.url.path.strip("/").split("/")
        repo = f"{parts[1]}/{parts[2]}"

        if repo in self.statuses:
            return httpx.Response(self.statuses[repo], json={"message": "forced"})

        if parts[-1] == "contributors":
            if repo not in self.repos:
                return httpx.Response(404, json={"message": "Not Found"})
            per_page = int(request.url.params.get("per_page", "30"))
            page = int(request.url.params.get("page", "1"))
            items = self.repos[repo]
            if self.endless:
                return httpx.Response(200, json=items[:per_page])
            return httpx.Response(200, json=items[(page - 1) * per_page:page * per_page])

        if repo in self.metadata:
            return httpx.Response(200, json=self.metadata[repo])
        return httpx.Response(404, json={"message": "Not Found"})

    # -------------------------------------------------------------------------
    # Request accounting
    # -------------------------------------------------------------------------

    @property
    def contributor_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/contributors")]

    @property
    def avatar_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == AVATAR_HOST]

    def client(self, **kwargs) -> GitHubClient:
        """GitHubClient whose HTTP traffic goes to this fake."""
        kwargs.setdefault("page_delay_seconds", 0)
        return GitHubClient(
            httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
            api_base=API_BASE,
            **kwargs,
        )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ContributorCache(ttl_seconds=300, clock=clock)


@pytest.fixture
def analytics():
    return RepoAnalytics()


@pytest.fixture
def test_settings():
    return Settings(GITHUB_TOKEN=None, CACHE_TTL_SECONDS=300, PAGE_DELAY_SECONDS=0)


@pytest.fixture
def app(fake_github, cache, analytics, test_settings):
    return create_app(
        test_settings,
        cache=cache,
        github_client=fake_github.client(),
        analytics=analytics,
    )


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def sample_contributor_dict():
    """One item of the GitHub contributors listing."""
    return {
        "login": "octocat",
        "id": 583231,
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
        "html_url": "https://github.com/octocat",
        "type": "User",
        "contributions": 42,
    }
