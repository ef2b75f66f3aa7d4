# =============================================================================
# lib/analytics.py - Badge Request Counters
# =============================================================================
# Counts badge requests per repository so /analytics/popular can list the
# most requested ones. Purely in-memory and lost on restart.
# =============================================================================

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass
class RepoUsage:
    """Request counter for one repository."""
    repository: str
    requests: int = 0
    last_accessed: datetime | None = None


class RepoAnalytics:
    """Thread-safe per-repository request counters."""

    def __init__(self):
        self._usage: dict[str, RepoUsage] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._usage)

    def record(self, repo: str) -> None:
        """Count one badge request for `repo`."""
        now = datetime.now(timezone.utc)
        with self._lock:
            usage = self._usage.setdefault(repo, RepoUsage(repository=repo))
            usage.requests += 1
            usage.last_accessed = now

    def popular(self, limit: int = 10) -> list[RepoUsage]:
        """Most requested repositories first; ties keep first-seen order."""
        with self._lock:
            snapshot = [
                RepoUsage(u.repository, u.requests, u.last_accessed)
                for u in self._usage.values()
            ]
        snapshot.sort(key=lambda u: u.requests, reverse=True)
        return snapshot[:limit]
