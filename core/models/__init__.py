# =============================================================================
# core/models/ - Data Models
# =============================================================================
# This package contains the service's data models:
# - contributor.py: ContributorRecord and AvatarImage (immutable dataclasses)
# - badge.py: Layout, Theme, RenderOptions, BadgeHeader
# - api.py: Pydantic request/response schemas for the JSON endpoints
# =============================================================================

# -----------------------------------------------------------------------------
# Contributor Models - What GitHub tells us about each contributor
# -----------------------------------------------------------------------------
from .contributor import (
    AvatarImage,
    ContributorRecord,
)

# -----------------------------------------------------------------------------
# Badge Models - Renderer inputs
# -----------------------------------------------------------------------------
from .badge import (
    BadgeHeader,
    Layout,
    RenderOptions,
    Theme,
)

# -----------------------------------------------------------------------------
# API Models - JSON endpoint contracts
# -----------------------------------------------------------------------------
from .api import (
    AnalyticsResponse,
    BatchFailure,
    BatchItem,
    BatchRequest,
    BatchResponse,
    ClearCacheResponse,
    ContributorSummary,
    HealthResponse,
    InvalidateRequest,
    InvalidateResponse,
    PopularRepository,
    RepoInfoResponse,
    StatsResponse,
)

__all__ = [
    # Contributor
    "AvatarImage",
    "ContributorRecord",
    # Badge
    "BadgeHeader",
    "Layout",
    "RenderOptions",
    "Theme",
    # API
    "AnalyticsResponse",
    "BatchFailure",
    "BatchItem",
    "BatchRequest",
    "BatchResponse",
    "ClearCacheResponse",
    "ContributorSummary",
    "HealthResponse",
    "InvalidateRequest",
    "InvalidateResponse",
    "PopularRepository",
    "RepoInfoResponse",
    "StatsResponse",
]
