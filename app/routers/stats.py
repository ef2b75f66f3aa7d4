# =============================================================================
# app/routers/stats.py - JSON Repository Endpoints
# =============================================================================
# Provides JSON views over the same contributor data the badges use:
# - GET /stats:              totals and the top 10 contributors
# - GET /repo-info:          repository metadata
# - POST /batch:             contributor lists for up to 10 repositories
# - GET /analytics/popular:  most requested badge repositories
# =============================================================================

import asyncio
import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Query

from app.dependencies import AnalyticsDep, ContributorServiceDep, GitHubClientDep
from app.exceptions import BadgeServiceException
from core.models.api import (
    AnalyticsResponse,
    BatchFailure,
    BatchItem,
    BatchRequest,
    BatchResponse,
    PopularRepository,
    RepoInfoResponse,
    StatsResponse,
    summaries,
)
from lib.utils import utc_now_iso
from lib.validation import validate_repo

logger = logging.getLogger(__name__)

router = APIRouter()

TOP_CONTRIBUTORS = 10


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    service: ContributorServiceDep,
    repo: str | None = Query(None, description='Repository in "owner/name" form'),
):
    """
    Contributor statistics for a repository.

    Walks every page of contributors (without avatars) and sums their
    contribution counts.
    """
    repo = validate_repo(repo)
    records = await service.get_contributors(repo, None, include_avatars=False)

    return StatsResponse(
        repository=repo,
        total_contributors=len(records),
        total_contributions=sum(record.contributions for record in records),
        top_contributors=summaries(records[:TOP_CONTRIBUTORS]),
        last_updated=utc_now_iso(),
    )


@router.get("/repo-info", response_model=RepoInfoResponse)
async def get_repo_info(
    client: GitHubClientDep,
    repo: str | None = Query(None, description='Repository in "owner/name" form'),
):
    """Basic repository information straight from GitHub (not cached)."""
    repo = validate_repo(repo)
    data = await client.fetch_repository(repo)

    return RepoInfoResponse(
        name=data.get("name"),
        full_name=data.get("full_name"),
        description=data.get("description"),
        stars=data.get("stargazers_count"),
        forks=data.get("forks_count"),
        language=data.get("language"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        html_url=data.get("html_url"),
    )


@router.post("/batch", response_model=BatchResponse)
async def post_batch(payload: BatchRequest, service: ContributorServiceDep):
    """
    Contributor lists for several repositories at once.

    Each repository succeeds or fails on its own; one bad repository never
    fails the whole batch.
    """

    async def lookup(raw_repo: str) -> BatchItem:
        repo = validate_repo(raw_repo)
        records = await service.get_contributors(repo, payload.limit, include_avatars=False)
        query = urlencode({
            "repo": repo,
            "limit": payload.limit,
            "style": payload.style.value,
            "theme": payload.theme.value,
        })
        return BatchItem(
            repository=repo,
            contributors=summaries(records[:payload.limit]),
            badge_url=f"/badge?{query}",
            contributor_count=len(records),
        )

    results = await asyncio.gather(
        *(lookup(repo) for repo in payload.repositories),
        return_exceptions=True,
    )

    successful: list[BatchItem] = []
    failed: list[BatchFailure] = []
    for repo, result in zip(payload.repositories, results):
        if isinstance(result, BatchItem):
            successful.append(result)
        elif isinstance(result, BadgeServiceException):
            failed.append(BatchFailure(repository=repo, error=result.message, code=result.code))
        elif isinstance(result, Exception):
            logger.error(f"Batch lookup failed for {repo}: {result}")
            failed.append(BatchFailure(
                repository=repo,
                error="Failed to fetch contributors",
                code="INTERNAL_ERROR",
            ))
        else:
            raise result

    return BatchResponse(
        successful_repositories=successful,
        failed_repositories=failed,
        total_processed=len(payload.repositories),
        timestamp=utc_now_iso(),
    )


@router.get("/analytics/popular", response_model=AnalyticsResponse)
async def get_popular(analytics: AnalyticsDep):
    """The ten most requested repositories since the process started."""
    popular = [
        PopularRepository(
            repository=usage.repository,
            requests=usage.requests,
            last_accessed=usage.last_accessed.isoformat() if usage.last_accessed else "",
        )
        for usage in analytics.popular(TOP_CONTRIBUTORS)
    ]
    return AnalyticsResponse(
        popular_repositories=popular,
        total_unique_repos=len(analytics),
        timestamp=utc_now_iso(),
    )
