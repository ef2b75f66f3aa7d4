# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable building blocks:
# - github_client.py: Async GitHub REST client (contributors, repos, avatars)
# - cache.py: TTL cache for contributor lists
# - badge_renderer.py: Pure SVG badge renderer
# - validation.py: Query parameter parsing shared by all endpoints
# - analytics.py: Per-repository badge request counters
# - utils.py: Small shared helpers (timestamps, boolean flags)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================
