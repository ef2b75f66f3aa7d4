# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the per-process collaborators.
# create_app() puts them on app.state; handlers receive them through
# Depends() so tests can build an app around fakes.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.services.contributor_service import ContributorService
from lib.analytics import RepoAnalytics
from lib.cache import ContributorCache
from lib.github_client import GitHubClient


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_cache(request: Request) -> ContributorCache:
    """The process-wide contributor cache."""
    return request.app.state.cache


def get_github_client(request: Request) -> GitHubClient:
    return request.app.state.github_client


def get_analytics(request: Request) -> RepoAnalytics:
    return request.app.state.analytics


def get_contributor_service(
    client: Annotated[GitHubClient, Depends(get_github_client)],
    cache: Annotated[ContributorCache, Depends(get_cache)],
) -> ContributorService:
    """Contributor service bound to the shared client and cache."""
    return ContributorService(client, cache)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
CacheDep = Annotated[ContributorCache, Depends(get_cache)]
GitHubClientDep = Annotated[GitHubClient, Depends(get_github_client)]
AnalyticsDep = Annotated[RepoAnalytics, Depends(get_analytics)]
ContributorServiceDep = Annotated[ContributorService, Depends(get_contributor_service)]
