# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Contributors Badge API:
# - test_models.py: Records, render options, API schemas, settings
# - test_validation.py: Query parameter parsing
# - test_cache.py: TTL cache behaviour
# - test_github_client.py: Pagination, avatars, error mapping (MockTransport)
# - test_badge_renderer.py: SVG geometry and markup
# - test_routes.py: Endpoints end to end via TestClient
#
# Run tests with: pytest
# =============================================================================
