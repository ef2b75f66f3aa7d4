# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now_iso() -> str:
    """
    Current UTC time as an ISO 8601 string.

    Used for the `timestamp` / `last_updated` fields of JSON responses.

    Example:
        utc_now_iso()  # "2024-01-15T10:30:00.123456+00:00"
    """
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Query String Utilities
# =============================================================================

def parse_flag(value: str | None, default: bool = True) -> bool:
    """
    Interpret a boolean query parameter.

    Only an explicit "false" (any case) switches the flag off; anything else,
    including garbage, keeps it on. A missing value returns `default`.

    Example:
        parse_flag("false")  # False
        parse_flag("yes")    # True
        parse_flag(None, default=False)  # False
    """
    if value is None:
        return default
    return value.strip().lower() != "false"
