# =============================================================================
# lib/github_client.py - GitHub REST API Client
# =============================================================================
# Async wrapper around the GitHub endpoints the badge service needs:
# - GET /repos/{repo}/contributors (single page or every page)
# - GET /repos/{repo} (repository metadata)
# - avatar image downloads (inlined into badges as data URIs)
#
# HTTP status codes from GitHub are translated into the service's own
# exceptions here, so callers only ever see:
#   RepositoryNotFoundError, RateLimitedError, AuthFailedError,
#   UpstreamUnavailableError
#
# Usage:
#   client = GitHubClient.from_settings(settings)
#   records = await client.fetch_contributors("octocat/hello-world", limit=10)
#   everyone = await client.fetch_contributors("octocat/hello-world", limit=None)
#   await client.aclose()
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from app.config import Settings
from app.exceptions import (
    AuthFailedError,
    RateLimitedError,
    RepositoryNotFoundError,
    UpstreamUnavailableError,
)
from core.models.contributor import (
    DEFAULT_AVATAR_MEDIA_TYPE,
    AvatarImage,
    ContributorRecord,
)

# Set up logging for this module
logger = logging.getLogger(__name__)

# GitHub refuses per_page above this
GITHUB_MAX_PAGE_SIZE = 100


class GitHubClient:
    """
    Client for contributor listings, repository metadata and avatars.

    One instance (and one pooled httpx.AsyncClient) is shared by all
    requests in the process. Every call carries its own timeout; a timeout
    is reported as UpstreamUnavailableError.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        api_base: str = "https://api.github.com",
        token: str | None = None,
        user_agent: str = "GitHub-Contributors-Badge-Service",
        timeout_seconds: float = 10.0,
        avatar_timeout_seconds: float = 5.0,
        max_pages: int = 100,
        page_delay_seconds: float = 0.1,
        avatar_batch_size: int = 10,
        max_inlined_avatars: int = 50,
    ):
        self._http = http_client or httpx.AsyncClient(follow_redirects=True)
        self.api_base = api_base.rstrip("/")
        self.token = token
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds
        self.avatar_timeout_seconds = avatar_timeout_seconds
        self.max_pages = max_pages
        self.page_delay_seconds = page_delay_seconds
        self.avatar_batch_size = max(1, avatar_batch_size)
        self.max_inlined_avatars = max_inlined_avatars

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> "GitHubClient":
        """Build a client configured from application settings."""
        return cls(
            http_client,
            api_base=settings.GITHUB_API_BASE,
            token=settings.GITHUB_TOKEN,
            user_agent=settings.USER_AGENT,
            timeout_seconds=settings.UPSTREAM_TIMEOUT_SECONDS,
            avatar_timeout_seconds=settings.AVATAR_TIMEOUT_SECONDS,
            max_pages=settings.MAX_PAGES,
            page_delay_seconds=settings.PAGE_DELAY_SECONDS,
            avatar_batch_size=settings.AVATAR_BATCH_SIZE,
            max_inlined_avatars=settings.MAX_INLINED_AVATARS,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Contributors
    # -------------------------------------------------------------------------

    async def fetch_contributors(
        self,
        repo: str,
        limit: int | None = 10,
        include_avatars: bool = True,
    ) -> list[ContributorRecord]:
        """
        Fetch contributors in GitHub's order (most contributions first).

        Args:
            repo: Repository in "owner/name" form
            limit: Number of contributors, or None to walk every page
            include_avatars: Download and embed avatar images

        Returns:
            Contributor records, never re-sorted

        Raises:
            RepositoryNotFoundError, RateLimitedError, AuthFailedError,
            UpstreamUnavailableError
        """
        if limit is None:
            items = await self._fetch_all_pages(repo)
            avatar_budget = self.max_inlined_avatars
        else:
            per_page = min(max(limit, 1), GITHUB_MAX_PAGE_SIZE)
            items = await self._fetch_page(repo, per_page=per_page)
            avatar_budget = len(items)

        if not include_avatars:
            avatar_budget = 0

        return await self._build_records(items, avatar_budget)

    async def _fetch_page(
        self,
        repo: str,
        per_page: int,
        page: int | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch one page of the contributors listing."""
        params: dict[str, int] = {"per_page": per_page}
        if page is not None:
            params["page"] = page

        response = await self._get_api(f"/repos/{repo}/contributors", repo, params=params)

        # Empty repositories answer 204 with no body
        if response.status_code == 204 or not response.content:
            return []

        data = self._json(response)
        if not isinstance(data, list):
            logger.error(f"Unexpected contributors payload for {repo}: {type(data).__name__}")
            raise UpstreamUnavailableError("Unexpected response from GitHub")
        if not all(isinstance(item, dict) for item in data):
            logger.error(f"Unexpected contributor item for {repo}")
            raise UpstreamUnavailableError("Unexpected response from GitHub")
        return data

    async def _fetch_all_pages(self, repo: str) -> list[dict[str, Any]]:
        """
        Walk the contributors listing until an empty page.

        Stops after `max_pages` pages even if GitHub keeps returning data.
        """
        items: list[dict[str, Any]] = []

        for page in range(1, self.max_pages + 1):
            batch = await self._fetch_page(repo, per_page=GITHUB_MAX_PAGE_SIZE, page=page)
            if not batch:
                break
            items.extend(batch)

            if page < self.max_pages and self.page_delay_seconds > 0:
                await asyncio.sleep(self.page_delay_seconds)
        else:
            logger.warning(f"Stopped paging {repo} at the {self.max_pages}-page ceiling")

        logger.info(f"Fetched {len(items)} contributors for {repo} across all pages")
        return items

    async def _build_records(
        self,
        items: list[dict[str, Any]],
        avatar_budget: int,
    ) -> list[ContributorRecord]:
        """
        Turn raw listing items into records, inlining avatars batch by batch.

        Only the first `avatar_budget` items get an avatar download. Within a
        batch downloads run concurrently, and the whole batch is joined
        before it is appended.
        """
        records: list[ContributorRecord] = []

        for start in range(0, len(items), self.avatar_batch_size):
            batch = items[start:start + self.avatar_batch_size]
            avatars = await asyncio.gather(*(
                self.fetch_avatar(item.get("avatar_url"))
                if start + offset < avatar_budget else _no_avatar()
                for offset, item in enumerate(batch)
            ))
            try:
                records.extend(
                    ContributorRecord.from_api(item, avatar=avatar)
                    for item, avatar in zip(batch, avatars)
                )
            except (TypeError, ValueError) as e:
                logger.error(f"Malformed contributor item: {e}")
                raise UpstreamUnavailableError("Unexpected response from GitHub") from e

        return records

    # -------------------------------------------------------------------------
    # Avatars
    # -------------------------------------------------------------------------

    async def fetch_avatar(self, url: str | None) -> AvatarImage | None:
        """
        Download one avatar image.

        Failures are logged and return None; the badge then shows a
        placeholder for that contributor instead of failing.
        """
        if not url:
            return None

        try:
            response = await self._http.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.avatar_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Failed to load avatar {url}: {e}")
            return None

        media_type = response.headers.get("content-type", DEFAULT_AVATAR_MEDIA_TYPE)
        media_type = media_type.split(";")[0].strip() or DEFAULT_AVATAR_MEDIA_TYPE
        return AvatarImage(data=response.content, media_type=media_type)

    # -------------------------------------------------------------------------
    # Repository Metadata
    # -------------------------------------------------------------------------

    async def fetch_repository(self, repo: str) -> dict[str, Any]:
        """Fetch the repository object from GET /repos/{repo}."""
        response = await self._get_api(f"/repos/{repo}", repo)
        data = self._json(response)
        if not isinstance(data, dict):
            raise UpstreamUnavailableError("Unexpected response from GitHub")
        return data

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/vnd.github.v3+json",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def _get_api(
        self,
        path: str,
        repo: str,
        params: dict[str, int] | None = None,
    ) -> httpx.Response:
        """GET an API path and translate failure statuses."""
        try:
            response = await self._http.get(
                f"{self.api_base}{path}",
                params=params,
                headers=self._headers(),
                timeout=self.timeout_seconds,
            )
        except httpx.TimeoutException as e:
            logger.error(f"GitHub request timed out for {repo}: {e}")
            raise UpstreamUnavailableError("GitHub did not answer in time") from e
        except httpx.HTTPError as e:
            logger.error(f"GitHub request failed for {repo}: {e}")
            raise UpstreamUnavailableError() from e

        status = response.status_code
        if status < 400:
            return response

        logger.error(f"GitHub answered {status} for {path}")
        if status == 404:
            raise RepositoryNotFoundError(repo)
        if status in (403, 429):
            raise RateLimitedError(repo)
        if status == 401:
            raise AuthFailedError()
        raise UpstreamUnavailableError()

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamUnavailableError("Unexpected response from GitHub") from e


async def _no_avatar() -> None:
    return None
