# =============================================================================
# app/exceptions.py - Custom Exceptions & Handlers
# =============================================================================
# Centralized error taxonomy for the badge service.
# Every failure the service knows about is one of these exceptions; anything
# else is caught by the catch-all handler in main.py and reported as a bare
# 500. Messages are safe to show callers: no tokens, no upstream payloads.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.utils import utc_now_iso


class BadgeServiceException(Exception):
    """
    Base exception for the badge service.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "BADGE_SERVICE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        result["timestamp"] = utc_now_iso()
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class InvalidParameterError(BadgeServiceException):
    """Raised when a query parameter is missing or malformed."""

    def __init__(self, parameter: str, message: str, suggestion: str | None = None):
        super().__init__(
            message=message,
            code="INVALID_PARAMETER",
            status_code=400,
            suggestion=suggestion,
            details={"parameter": parameter}
        )


# =============================================================================
# Upstream Exceptions
# =============================================================================

class RepositoryNotFoundError(BadgeServiceException):
    """Raised when GitHub answers 404 for the repository."""

    def __init__(self, repo: str):
        super().__init__(
            message="Repository not found",
            code="REPOSITORY_NOT_FOUND",
            status_code=404,
            suggestion="Check the owner/name spelling and that the repository is public",
            details={"repository": repo}
        )


class RateLimitedError(BadgeServiceException):
    """Raised when GitHub refuses the call because of rate limiting."""

    def __init__(self, repo: str | None = None):
        super().__init__(
            message="API rate limit exceeded. Please try again later.",
            code="RATE_LIMITED",
            status_code=429,
            suggestion="Set the GITHUB_TOKEN environment variable to raise the GitHub rate limit",
            details={"repository": repo} if repo else None
        )


class AuthFailedError(BadgeServiceException):
    """Raised when GitHub rejects the configured credential."""

    def __init__(self):
        super().__init__(
            message="GitHub authentication failed",
            code="AUTH_FAILED",
            status_code=401,
            suggestion="Check that GITHUB_TOKEN is valid and has not expired",
        )


class UpstreamUnavailableError(BadgeServiceException):
    """Raised for timeouts, transport errors and unexpected upstream answers."""

    def __init__(self, message: str = "Failed to fetch data from GitHub"):
        super().__init__(
            message=message,
            code="UPSTREAM_UNAVAILABLE",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
        )


class EmptyResultError(BadgeServiceException):
    """Raised when the repository exists but lists no contributors."""

    def __init__(self, repo: str):
        super().__init__(
            message="No contributors found",
            code="NO_CONTRIBUTORS",
            status_code=404,
            details={"repository": repo}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def badge_service_exception_handler(
    request: Request,
    exc: BadgeServiceException
) -> JSONResponse:
    """
    Convert BadgeServiceException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    - timestamp: When the error was produced
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors.

    Missing query parameters and malformed JSON bodies are client errors
    like any other bad parameter, so they get the same 400 shape.
    """
    errors = exc.errors()
    parameter = "request"
    if errors:
        location = [str(part) for part in errors[0].get("loc", ()) if part not in ("query", "body")]
        if location:
            parameter = ".".join(location)

    error = InvalidParameterError(
        parameter=parameter,
        message=f"Invalid or missing parameter: {parameter}",
    )
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )
