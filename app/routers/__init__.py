# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - badges.py: SVG badge endpoints
# - stats.py: JSON stats, repository info, batch and analytics endpoints
# - health.py: Health check and cache maintenance endpoints
#
# Each router is mounted in main.py.
# =============================================================================

from . import badges
from . import health
from . import stats

__all__ = [
    "badges",
    "health",
    "stats",
]
