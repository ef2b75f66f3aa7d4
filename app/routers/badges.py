# =============================================================================
# app/routers/badges.py - SVG Badge Endpoints
# =============================================================================
# Provides the badge endpoints embedded in READMEs:
# - GET /badge:        configurable badge (limit, style, theme, avatars)
# - GET /badge/all:    every contributor, grid for large repositories
# - GET /badge/fast:   never embeds avatars, placeholders only
# - GET /badge/custom: adds a title/subtitle and contribution counts
#
# Every endpoint validates its query string before touching the cache or
# GitHub. Failures surface as BadgeServiceException subclasses and are
# turned into JSON by the handlers registered in main.py.
# =============================================================================

import logging
from typing import Annotated, Sequence

from fastapi import APIRouter, Query
from fastapi.responses import Response

from app.dependencies import AnalyticsDep, ContributorServiceDep
from app.exceptions import EmptyResultError
from core.models.badge import BadgeHeader, Layout, RenderOptions, Theme
from core.models.contributor import ContributorRecord
from lib.badge_renderer import render_badge, resolve_layout
from lib.utils import parse_flag
from lib.validation import parse_layout, parse_limit, parse_theme, validate_repo

logger = logging.getLogger(__name__)

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"
SHORT_CACHE_CONTROL = "public, max-age=300, s-maxage=300"
LONG_CACHE_CONTROL = "public, max-age=3600, s-maxage=3600"

# Query parameters are declared as plain strings and parsed by lib.validation
# so every bad value gets the same 400 body.
RepoParam = Annotated[str | None, Query(description='Repository in "owner/name" form')]
LimitParam = Annotated[str | None, Query(description='1-100, or "all"')]
StyleParam = Annotated[str | None, Query(description='"horizontal" or "grid"')]
ThemeParam = Annotated[str | None, Query(description='"light" or "dark"')]
AvatarsParam = Annotated[str | None, Query(description='"false" to skip avatar images')]


def _svg_response(
    repo: str,
    records: Sequence[ContributorRecord],
    layout: Layout,
    theme: Theme,
    cache_control: str = SHORT_CACHE_CONTROL,
    header: BadgeHeader | None = None,
    show_contributions: bool = False,
) -> Response:
    """Render records and wrap them with badge caching and CORS headers."""
    if not records:
        raise EmptyResultError(repo)

    options = RenderOptions(
        layout=resolve_layout(len(records), layout),
        theme=theme,
        show_contributions=show_contributions,
    )
    svg = render_badge(records, options, header=header)

    return Response(
        content=svg,
        media_type=SVG_MEDIA_TYPE,
        headers={
            "Cache-Control": cache_control,
            "Access-Control-Allow-Origin": "*",
        },
    )


# =============================================================================
# Badge Endpoints
# =============================================================================

@router.get("/badge")
async def get_badge(
    service: ContributorServiceDep,
    analytics: AnalyticsDep,
    repo: RepoParam = None,
    limit: LimitParam = None,
    style: StyleParam = None,
    theme: ThemeParam = None,
    avatars: AvatarsParam = None,
):
    """
    Contributor badge for a repository.

    limit=all walks every page of contributors; horizontal badges with more
    than 20 contributors are drawn as a grid.
    """
    repo = validate_repo(repo)
    limit_value = parse_limit(limit)
    layout = parse_layout(style)
    theme_value = parse_theme(theme)
    analytics.record(repo)

    records = await service.get_contributors(repo, limit_value, parse_flag(avatars))
    return _svg_response(repo, records, layout, theme_value)


@router.get("/badge/all")
async def get_badge_all(
    service: ContributorServiceDep,
    analytics: AnalyticsDep,
    repo: RepoParam = None,
    style: StyleParam = None,
    theme: ThemeParam = None,
    avatars: AvatarsParam = None,
):
    """Badge with every contributor. Cached by browsers for an hour."""
    repo = validate_repo(repo)
    layout = parse_layout(style, default=Layout.GRID)
    theme_value = parse_theme(theme)
    analytics.record(repo)

    logger.info(f"Fetching ALL contributors for {repo}")
    records = await service.get_contributors(repo, None, parse_flag(avatars))
    logger.info(f"Found {len(records)} contributors for {repo}")

    return _svg_response(repo, records, layout, theme_value, cache_control=LONG_CACHE_CONTROL)


@router.get("/badge/fast")
async def get_badge_fast(
    service: ContributorServiceDep,
    analytics: AnalyticsDep,
    repo: RepoParam = None,
    limit: LimitParam = None,
    style: StyleParam = None,
    theme: ThemeParam = None,
):
    """Badge without avatar downloads; every contributor gets a placeholder."""
    repo = validate_repo(repo)
    limit_value = parse_limit(limit)
    layout = parse_layout(style)
    theme_value = parse_theme(theme)
    analytics.record(repo)

    records = await service.get_contributors(repo, limit_value, include_avatars=False)
    return _svg_response(repo, records, layout, theme_value)


@router.get("/badge/custom")
async def get_badge_custom(
    service: ContributorServiceDep,
    analytics: AnalyticsDep,
    repo: RepoParam = None,
    limit: LimitParam = None,
    style: StyleParam = None,
    theme: ThemeParam = None,
    title: Annotated[str | None, Query(max_length=100)] = None,
    subtitle: Annotated[str | None, Query(max_length=200)] = None,
    show_contributions: Annotated[str | None, Query(description='"true" to print counts')] = None,
):
    """
    Badge with an optional title block and per-contributor counts.

    The header is drawn by the renderer itself and pushes the avatars down.
    """
    repo = validate_repo(repo)
    limit_value = parse_limit(limit)
    layout = parse_layout(style)
    theme_value = parse_theme(theme)
    analytics.record(repo)

    records = await service.get_contributors(repo, limit_value, include_avatars=True)
    return _svg_response(
        repo,
        records,
        layout,
        theme_value,
        header=BadgeHeader(title=title or None, subtitle=subtitle or None),
        show_contributions=parse_flag(show_contributions, default=False),
    )
