# =============================================================================
# lib/validation.py - Request Parameter Validation
# =============================================================================
# Shared parsing for the query parameters every endpoint accepts.
# Each function either returns the parsed value or raises
# InvalidParameterError (400) so handlers never reach the cache or GitHub
# with a bad input.
#
# Usage:
#   from lib.validation import validate_repo, parse_limit
#   repo = validate_repo(request_repo)
#   limit = parse_limit("all")  # None means "every contributor"
# =============================================================================

import re

from app.exceptions import InvalidParameterError
from core.models.badge import Layout, Theme

MIN_LIMIT = 1
MAX_LIMIT = 100
UNBOUNDED_LIMIT = "all"

# Characters GitHub allows in owner and repository names
REPO_SEGMENT_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


def validate_repo(repo: str | None) -> str:
    """
    Check a repository identifier of the form "owner/name".

    Exactly one "/" separating two non-empty segments is accepted. Each
    segment is limited to letters, digits, "_", "." and "-", and may not be
    "." or "..", so it can be placed in an API path as is.
    Surrounding whitespace is stripped.

    Raises:
        InvalidParameterError: If the identifier is missing or malformed
    """
    if repo is None or not repo.strip():
        raise InvalidParameterError(
            parameter="repo",
            message="Repository parameter is required",
            suggestion='Pass ?repo=owner/name',
        )

    repo = repo.strip()
    parts = repo.split("/")
    if len(parts) != 2 or not all(_is_repo_segment(part) for part in parts):
        raise InvalidParameterError(
            parameter="repo",
            message='Repository must be in format "username/repo-name"',
            suggestion='Use exactly one "/" between owner and repository name',
        )
    return repo


def _is_repo_segment(segment: str) -> bool:
    return segment not in (".", "..") and REPO_SEGMENT_PATTERN.fullmatch(segment) is not None


def parse_limit(value: str | None, default: int = 10) -> int | None:
    """
    Parse the `limit` parameter.

    Returns:
        An int in [1, 100], or None for the literal "all"

    Raises:
        InvalidParameterError: For non-integers or out-of-range values
    """
    if value is None or value == "":
        return default

    value = value.strip()
    if value.lower() == UNBOUNDED_LIMIT:
        return None

    limit = int(value) if value.isascii() and value.isdigit() else None

    if limit is None or not MIN_LIMIT <= limit <= MAX_LIMIT:
        raise InvalidParameterError(
            parameter="limit",
            message=f'Limit must be between {MIN_LIMIT} and {MAX_LIMIT}, or "{UNBOUNDED_LIMIT}"',
        )
    return limit


def parse_layout(value: str | None, default: Layout = Layout.HORIZONTAL) -> Layout:
    """Parse the `style` parameter into a Layout."""
    if value is None or value == "":
        return default
    try:
        return Layout(value.strip().lower())
    except ValueError:
        raise InvalidParameterError(
            parameter="style",
            message='Style must be "horizontal" or "grid"',
        ) from None


def parse_theme(value: str | None, default: Theme = Theme.LIGHT) -> Theme:
    """Parse the `theme` parameter into a Theme."""
    if value is None or value == "":
        return default
    try:
        return Theme(value.strip().lower())
    except ValueError:
        raise InvalidParameterError(
            parameter="theme",
            message='Theme must be "light" or "dark"',
        ) from None
