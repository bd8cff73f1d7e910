# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized error taxonomy for the portfolio backend:
# - ValidationError: client-side precondition failure, never reaches Supabase
# - StorageError: bucket/object failure reported by Supabase Storage
# - SyncError: one entity failed to migrate from local drafts
# - Not-found and save errors raised by the HTTP layer
#
# Errors carry a suggestion telling HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class PortfolioException(Exception):
    """
    Base exception for the portfolio backend.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PORTFOLIO_ERROR",
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
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationError(PortfolioException):
    """Raised when input fails a client-side precondition."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        status_code: int = 400,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            suggestion=suggestion,
            details=details,
        )


class FileTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        size_mb = size_bytes / (1024 * 1024)
        max_mb = max_bytes / (1024 * 1024)
        super().__init__(
            message=f"File size exceeds {max_mb:g}MB limit ({size_mb:.1f}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb:g}MB",
            details={"size_bytes": size_bytes, "max_bytes": max_bytes},
        )


class InvalidFileTypeError(ValidationError):
    """Raised when an upload's MIME type doesn't match the accept pattern."""

    def __init__(self, content_type: str, accepted: list[str]):
        super().__init__(
            message=f"File type {content_type or 'unknown'} is not accepted",
            code="INVALID_FILE_TYPE",
            status_code=415,
            suggestion=f"Only these file types are supported: {', '.join(accepted)}",
            details={"content_type": content_type, "accepted_types": accepted},
        )


# =============================================================================
# Storage / Sync Exceptions
# =============================================================================

class StorageError(PortfolioException):
    """Raised when a bucket or object operation fails in Supabase Storage."""

    def __init__(self, operation: str, error: str, bucket: str | None = None):
        super().__init__(
            message=f"Storage {operation} failed: {error}",
            code="STORAGE_ERROR",
            status_code=502,
            suggestion="Check the bucket exists and the service key can write to it, then retry",
            details={"operation": operation, "bucket": bucket, "error": error},
        )


class SyncError(PortfolioException):
    """Raised when a single entity fails to migrate to Supabase."""

    def __init__(self, entity: str, key: str, error: str):
        super().__init__(
            message=f"Failed to migrate {entity} '{key}': {error}",
            code="SYNC_ERROR",
            status_code=500,
            suggestion="Fix the draft or the remote table and run the migration again",
            details={"entity": entity, "key": key, "error": error},
        )
        self.entity = entity
        self.key = key


# =============================================================================
# Content Exceptions
# =============================================================================

class ProjectNotFoundError(PortfolioException):
    """Raised when a project ID or slug doesn't exist."""

    def __init__(self, project_ref: str):
        super().__init__(
            message=f"Project not found: {project_ref}",
            code="PROJECT_NOT_FOUND",
            status_code=404,
            suggestion="Check that the project id or slug is correct",
            details={"project": project_ref},
        )


class SubmissionNotFoundError(PortfolioException):
    """Raised when a contact submission ID doesn't exist."""

    def __init__(self, submission_id: str):
        super().__init__(
            message=f"Contact submission not found: {submission_id}",
            code="SUBMISSION_NOT_FOUND",
            status_code=404,
            details={"submission_id": submission_id},
        )


class ContentSaveError(PortfolioException):
    """Raised when the content repository could not persist a write."""

    def __init__(self, entity: str):
        super().__init__(
            message=f"Failed to save {entity}",
            code="CONTENT_SAVE_ERROR",
            status_code=500,
            suggestion="Check the server logs for the underlying database error",
            details={"entity": entity},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def portfolio_exception_handler(
    request: Request,
    exc: PortfolioException
) -> JSONResponse:
    """
    Convert PortfolioException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle request body/query validation errors."""
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "REQUEST_VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
