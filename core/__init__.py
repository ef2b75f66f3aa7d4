# =============================================================================
# core/ - Domain Models and Services
# =============================================================================
# - models/: contributor records, render options and JSON API schemas
# - services/: cached contributor lookups shared by the routers
# =============================================================================
