"""
Shared error handling for the Currency Layer Access service.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error payload nested under the ``error`` member."""

    message: str
    code: int


class ErrorResponse(BaseModel):
    """Standard error response format: ``{"error": {"message": ..., "code": ...}}``."""

    error: ErrorDetail


class ServiceException(Exception):
    """Base exception for service errors rendered as an :class:`ErrorResponse`.

    ``code`` doubles as the HTTP status of the rendered response.
    """

    def __init__(self, code: int, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(error=ErrorDetail(message=self.message, code=self.code))


class UpstreamUnavailableError(ServiceException):
    """The currency API could not be reached or returned an unusable response."""

    def __init__(self, message: str = "Currency API is not available", details: Optional[Dict[str, Any]] = None):
        super().__init__(502, message, details)


class InternalServiceError(ServiceException):
    """Unexpected failure inside the service."""

    def __init__(self, message: str = "Internal server error", details: Optional[Dict[str, Any]] = None):
        super().__init__(500, message, details)
