# =============================================================================
# core/models/api.py - JSON API Schemas
# =============================================================================
# Request and response models for the JSON endpoints:
# - StatsResponse / ContributorSummary: GET /stats
# - RepoInfoResponse: GET /repo-info
# - HealthResponse / ClearCacheResponse: service maintenance endpoints
# - InvalidateRequest / InvalidateResponse: POST /webhook/invalidate
# - PopularRepository / AnalyticsResponse: GET /analytics/popular
# - BatchRequest / BatchResponse: POST /batch
#
# Badge endpoints return SVG and have no response model.
# =============================================================================

from typing import Iterable

from pydantic import BaseModel, Field

from .badge import Layout, Theme
from .contributor import ContributorRecord


# =============================================================================
# Stats
# =============================================================================

class ContributorSummary(BaseModel):
    """One contributor as listed in JSON responses."""
    username: str
    contributions: int
    avatar_url: str
    profile_url: str


class StatsResponse(BaseModel):
    """
    Contributor statistics for a repository.

    Example:
        {
            "repository": "octocat/hello-world",
            "total_contributors": 42,
            "total_contributions": 1337,
            "top_contributors": [{"username": "octocat", ...}],
            "last_updated": "2024-01-15T10:30:00+00:00"
        }
    """
    repository: str
    total_contributors: int = Field(..., ge=0)
    total_contributions: int = Field(..., ge=0)
    top_contributors: list[ContributorSummary]
    last_updated: str


class RepoInfoResponse(BaseModel):
    """Basic repository metadata, trimmed from the upstream payload."""
    name: str | None = None
    full_name: str | None = None
    description: str | None = None
    stars: int | None = None
    forks: int | None = None
    language: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    html_url: str | None = None


# =============================================================================
# Maintenance
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    cache_size: int
    github_token: bool
    version: str


class ClearCacheResponse(BaseModel):
    message: str
    cleared_entries: int
    timestamp: str


class InvalidateRequest(BaseModel):
    """Payload sent by a push webhook to drop one repository's entries."""
    repo: str = Field(..., min_length=1, description="Repository in owner/name form")


class InvalidateResponse(BaseModel):
    message: str
    repository: str
    cleared_entries: int
    timestamp: str


# =============================================================================
# Analytics
# =============================================================================

class PopularRepository(BaseModel):
    repository: str
    requests: int
    last_accessed: str


class AnalyticsResponse(BaseModel):
    popular_repositories: list[PopularRepository]
    total_unique_repos: int
    timestamp: str


# =============================================================================
# Batch
# =============================================================================

class BatchRequest(BaseModel):
    """
    Fetch contributors for several repositories at once.

    Avatars are never embedded for batch lookups.

    Example:
        {
            "repositories": ["octocat/hello-world", "psf/requests"],
            "limit": 5
        }
    """
    repositories: list[str] = Field(
        ...,
        min_length=1,
        max_length=10,
        description="Up to 10 repositories in owner/name form"
    )
    limit: int = Field(default=5, ge=1, le=100)
    style: Layout = Layout.HORIZONTAL
    theme: Theme = Theme.LIGHT


class BatchItem(BaseModel):
    repository: str
    contributors: list[ContributorSummary]
    badge_url: str
    contributor_count: int


class BatchFailure(BaseModel):
    repository: str
    error: str
    code: str


class BatchResponse(BaseModel):
    successful_repositories: list[BatchItem]
    failed_repositories: list[BatchFailure]
    total_processed: int
    timestamp: str


def summaries(records: Iterable[ContributorRecord]) -> list[ContributorSummary]:
    """Convert contributor records to their JSON summaries."""
    return [ContributorSummary(**record.to_summary()) for record in records]
