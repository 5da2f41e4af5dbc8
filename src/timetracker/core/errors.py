"""Custom exceptions and error response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Standardized error response."""

    error: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional context")


class AppError(Exception):
    """Base exception for all app-level errors."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)

    def to_response(self) -> ErrorDetail:
        """Convert to API response schema."""
        return ErrorDetail(
            error=self.message,
            code=self.code,
            details=self.details if self.details else None,
        )


class ValidationError(AppError):
    """Raised when request validation fails."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details,
        )


class NotFoundError(AppError):
    """Raised when the resource an operation needs doesn't exist."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=400,
            details=details,
        )


class ConflictError(AppError):
    """Raised when an operation conflicts with the current state."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="CONFLICT",
            message=message,
            status_code=400,
            details=details,
        )


class UnauthenticatedError(AppError):
    """Raised when credentials are missing or invalid."""

    def __init__(self, message: str = "Invalid credentials", challenge: bool = False):
        super().__init__(
            code="UNAUTHENTICATED",
            message=message,
            status_code=401,
            headers={"WWW-Authenticate": "Basic"} if challenge else None,
        )


class ForbiddenError(AppError):
    """Raised when user lacks permission."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(
            code="FORBIDDEN",
            message=message,
            status_code=403,
        )


class ConfigError(Exception):
    """Raised at startup when required configuration is missing or invalid."""
