# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Contributors Badge API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --port 3000
#   python -m app.main            # honours PORT / API_HOST
# =============================================================================

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import VERSION, Settings, settings as default_settings
from app.exceptions import (
    BadgeServiceException,
    badge_service_exception_handler,
    validation_exception_handler,
)
from app.routers import badges, health, stats
from lib.analytics import RepoAnalytics
from lib.cache import ContributorCache
from lib.github_client import GitHubClient
from lib.utils import utc_now_iso

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log configuration that affects upstream behaviour
    - Shutdown: close the pooled GitHub HTTP client
    """
    config: Settings = app.state.settings
    logger.info(f"Contributors Badge Service starting on port {config.PORT}")
    logger.info(
        "GitHub token: "
        + ("configured" if config.has_github_token else "not configured (rate limited)")
    )

    yield

    logger.info("Shutting down Contributors Badge Service")
    await app.state.github_client.aclose()


def create_app(
    settings: Settings | None = None,
    *,
    cache: ContributorCache | None = None,
    github_client: GitHubClient | None = None,
    analytics: RepoAnalytics | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    The cache, GitHub client and analytics store are created once here and
    shared by every request; pass them in to substitute fakes in tests.
    """
    if settings is None:
        settings = default_settings

    app = FastAPI(
        title="GitHub Contributors Badge API",
        description="""
## Contributor badges for any public GitHub repository

Embed an always-fresh SVG of a repository's contributors in a README:

```markdown
![Contributors](https://your-service.example/badge?repo=owner/name&limit=12)
```

| Endpoint | Returns |
|----------|---------|
| `GET /badge` | SVG badge (`limit`, `style`, `theme`, `avatars`) |
| `GET /badge/all` | SVG badge with every contributor |
| `GET /badge/fast` | SVG badge without avatar downloads |
| `GET /badge/custom` | SVG badge with title, subtitle and counts |
| `GET /stats` | Contributor totals as JSON |
| `GET /repo-info` | Repository metadata as JSON |

Contributor lists are cached for five minutes. Set `GITHUB_TOKEN` to raise
the GitHub rate limit.
""",
        version=VERSION,
        # Interactive docs are only served outside production
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Badges", "description": "SVG contributor badges"},
            {"name": "Stats", "description": "JSON repository and contributor data"},
            {"name": "Health", "description": "Health checks and cache maintenance"},
        ],
    )

    app.state.settings = settings
    # Empty stores are falsy (they define __len__), so compare against None
    if cache is None:
        cache = ContributorCache(ttl_seconds=settings.CACHE_TTL_SECONDS)
    if analytics is None:
        analytics = RepoAnalytics()
    if github_client is None:
        github_client = GitHubClient.from_settings(
            settings,
            httpx.AsyncClient(follow_redirects=True),
        )

    app.state.cache = cache
    app.state.analytics = analytics
    app.state.github_client = github_client

    # =========================================================================
    # Middleware
    # =========================================================================

    # Badges are embedded from arbitrary origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list or ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(BadgeServiceException, badge_service_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
                "timestamp": utc_now_iso(),
            }
        )

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(badges.router, tags=["Badges"])
    app.include_router(stats.router, tags=["Stats"])
    app.include_router(health.router, tags=["Health"])

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "GitHub Contributors Badge API",
            "version": VERSION,
            "docs": "/docs",
            "health": "/health",
            "example": "/badge?repo=facebook/react&limit=8",
        }

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=default_settings.API_HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
