# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .contributor_service import ContributorService

__all__ = [
    "ContributorService",
]
