# =============================================================================
# lib/cache.py - Contributor List Cache
# =============================================================================
# In-memory store of recently fetched contributor lists.
#
# - Entries are keyed by (repository, count or "all", avatars flag)
# - An entry older than the freshness window is never returned; it is
#   dropped on the lookup that finds it stale
# - There is no size bound and no background sweep
# - One instance per process, created by create_app() and injected into
#   handlers; each uvicorn worker therefore has its own cache
#
# Usage:
#   cache = ContributorCache(ttl_seconds=300)
#   key = CacheKey.build("octocat/hello-world", 10, True)
#   records = cache.get(key)
#   if records is None:
#       records = await client.fetch_contributors(...)
#       cache.put(key, records)
# =============================================================================

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, NamedTuple

from core.models.contributor import ContributorRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0
ALL_CONTRIBUTORS = "all"


class CacheKey(NamedTuple):
    """Composite cache key; `count` is an int or "all"."""
    repo: str
    count: int | str
    include_avatars: bool

    @classmethod
    def build(cls, repo: str, limit: int | None, include_avatars: bool) -> "CacheKey":
        """
        Build a key from request parameters.

        GitHub treats owner/name case-insensitively, so the repository
        component is lower-cased to share entries across spellings.
        """
        count: int | str = ALL_CONTRIBUTORS if limit is None else limit
        return cls(repo.lower(), count, include_avatars)

    def __str__(self) -> str:
        return f"{self.repo}-{self.count}-{str(self.include_avatars).lower()}"


@dataclass(frozen=True)
class CacheEntry:
    records: tuple[ContributorRecord, ...]
    created_at: float


class ContributorCache:
    """
    TTL cache for contributor lists.

    Entries are replaced whole under a lock, so a reader sees either the
    previous entry or the new one, never a mix. Two concurrent misses for
    the same key may both fetch upstream; the last `put` wins.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def get(self, key: CacheKey) -> tuple[ContributorRecord, ...] | None:
        """Return the cached records if still fresh, otherwise None."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._clock() - entry.created_at < self.ttl_seconds:
                return entry.records
            # Stale: drop it so the next put starts clean
            del self._store[key]

        logger.debug(f"Cache entry expired: {key}")
        return None

    def put(self, key: CacheKey, records: Iterable[ContributorRecord]) -> None:
        """Store records under `key`, overwriting any existing entry."""
        entry = CacheEntry(records=tuple(records), created_at=self._clock())
        with self._lock:
            self._store[key] = entry

    def invalidate(self, repo: str) -> int:
        """
        Remove every entry for one repository.

        Returns:
            Number of entries removed
        """
        repo = repo.strip().lower()
        with self._lock:
            doomed = [key for key in self._store if key.repo == repo]
            for key in doomed:
                del self._store[key]

        if doomed:
            logger.info(f"Invalidated {len(doomed)} cache entries for {repo}")
        return len(doomed)

    def clear(self) -> int:
        """
        Remove everything.

        Returns:
            Number of entries held before clearing
        """
        with self._lock:
            size = len(self._store)
            self._store.clear()

        logger.info(f"Cache cleared ({size} entries)")
        return size
