# =============================================================================
# app/routers/health.py - Health & Cache Maintenance Endpoints
# =============================================================================
# Provides endpoints for monitoring and for dropping cached data:
# - GET /health:               liveness plus cache size and token status
# - POST /clear-cache:         empty the whole contributor cache
# - POST /webhook/invalidate:  drop one repository's entries (push hooks)
# =============================================================================

import logging

from fastapi import APIRouter

from app.config import VERSION
from app.dependencies import CacheDep, SettingsDep
from core.models.api import (
    ClearCacheResponse,
    HealthResponse,
    InvalidateRequest,
    InvalidateResponse,
)
from lib.utils import utc_now_iso
from lib.validation import validate_repo

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(cache: CacheDep, settings: SettingsDep):
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    Always 200 while the process is serving requests.
    """
    return HealthResponse(
        status="ok",
        timestamp=utc_now_iso(),
        cache_size=len(cache),
        github_token=settings.has_github_token,
        version=VERSION,
    )


@router.post("/clear-cache", response_model=ClearCacheResponse)
async def clear_cache(cache: CacheDep):
    """Drop every cached contributor list."""
    cleared = cache.clear()
    return ClearCacheResponse(
        message="Cache cleared successfully",
        cleared_entries=cleared,
        timestamp=utc_now_iso(),
    )


@router.post("/webhook/invalidate", response_model=InvalidateResponse)
async def invalidate_repository(payload: InvalidateRequest, cache: CacheDep):
    """
    Drop cached lists for one repository.

    Meant to be called from a GitHub push webhook so badges pick up new
    contributors before the freshness window runs out.
    """
    repo = validate_repo(payload.repo)
    cleared = cache.invalidate(repo)
    logger.info(f"Webhook invalidation for {repo}: {cleared} entries")

    return InvalidateResponse(
        message="Cache invalidated successfully",
        repository=repo,
        cleared_entries=cleared,
        timestamp=utc_now_iso(),
    )
