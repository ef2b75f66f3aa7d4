# =============================================================================
# core/services/contributor_service.py - Cached Contributor Lookups
# =============================================================================
# The cache -> GitHub -> cache pipeline shared by every endpoint that needs
# a contributor list. Routers validate their parameters first and call in
# here with already-clean values.
# =============================================================================

import logging

from core.models.contributor import ContributorRecord
from lib.cache import CacheKey, ContributorCache
from lib.github_client import GitHubClient

logger = logging.getLogger(__name__)


class ContributorService:
    """
    Service for contributor lists backed by the in-memory cache.

    Upstream exceptions from GitHubClient propagate unchanged; nothing is
    cached when the fetch fails.
    """

    def __init__(self, client: GitHubClient, cache: ContributorCache):
        self.client = client
        self.cache = cache

    async def get_contributors(
        self,
        repo: str,
        limit: int | None,
        include_avatars: bool = True,
    ) -> tuple[ContributorRecord, ...]:
        """
        Contributors for a repository, served from cache when fresh.

        Args:
            repo: Validated "owner/name"
            limit: 1-100, or None for every contributor
            include_avatars: Embed avatar images in the records

        Returns:
            Contributor records in upstream order
        """
        key = CacheKey.build(repo, limit, include_avatars)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        logger.info(f"Cache miss: {key}, fetching from GitHub")
        records = await self.client.fetch_contributors(
            repo,
            limit=limit,
            include_avatars=include_avatars,
        )
        self.cache.put(key, records)
        return tuple(records)
