# 📄 File: plant_health_api/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# Defines the kinds of things that can go wrong in the disease detection service (bad input,
# missing records, someone else's data, slow or broken partner services) so every failure
# reaches the app with a clear, consistent message.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy carrying HTTP status codes, machine readable error codes and
# structured details, rendered by the application level exception handler.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# All modules: domain services, repositories, external API clients, API endpoints, main.py handler

from typing import Any, Dict, Optional

from fastapi import status


class PlantHealthException(Exception):
    """
    Base exception class for the Plant Health API.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(PlantHealthException):
    """
    Exception raised for authentication failures.
    Used when the bearer token is missing, malformed or expired.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(PlantHealthException):
    """
    Exception raised when a caller touches a resource owned by another user.
    """

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="AUTHORIZATION_ERROR"
        )


# =============================================================================
# INPUT & LOOKUP EXCEPTIONS
# =============================================================================

class ValidationError(PlantHealthException):
    """
    Exception raised for data validation failures.
    Reported to the caller as is, never retried.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if constraint:
            details["constraint"] = constraint

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(PlantHealthException):
    """
    Exception raised when requested resource is not found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class RateLimitError(PlantHealthException):
    """
    Exception raised when rate limits are exceeded.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if retry_after:
            details["retry_after"] = retry_after

        super().__init__(
            message=message,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            details=details,
            error_code="RATE_LIMIT_EXCEEDED"
        )


# =============================================================================
# DATABASE & INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class DatabaseError(PlantHealthException):
    """
    Exception raised for database operation failures.
    Used for connection issues, failed commits, uninitialized sessions.
    """

    def __init__(
        self,
        message: str = "Database error",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATABASE_ERROR"
        )


class RepositoryError(PlantHealthException):
    """
    Exception raised for repository/database operation failures.
    Used when database operations fail at the repository layer.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: Optional[str] = None,
        entity: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if entity:
            details["entity"] = entity

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="REPOSITORY_ERROR"
        )


# =============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class ExternalAPIError(PlantHealthException):
    """
    Exception raised when a third-party service (plant identification,
    generative text, weather) answers with an error status.
    """

    def __init__(
        self,
        message: str = "External API error",
        api_name: Optional[str] = None,
        api_status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        error_code: str = "EXTERNAL_API_ERROR"
    ):
        if not details:
            details = {}

        if api_name:
            details["api_name"] = api_name
        if api_status_code:
            details["api_status_code"] = api_status_code

        super().__init__(
            message=message,
            status_code=status_code,
            details=details,
            error_code=error_code
        )


class APIAuthenticationError(ExternalAPIError):
    """Raised when a third-party service rejects our API key."""

    def __init__(self, api_name: str, api_status_code: int = status.HTTP_401_UNAUTHORIZED):
        super().__init__(
            message=f"{api_name} API rejected the configured credentials",
            api_name=api_name,
            api_status_code=api_status_code,
            details={"suggestion": "Check the API key configuration"},
            error_code="EXTERNAL_API_AUTH_ERROR"
        )


class APIRateLimitError(ExternalAPIError):
    """Raised when a third-party service throttles us."""

    def __init__(self, api_name: str, retry_after: Optional[str] = None):
        super().__init__(
            message=f"{api_name} API rate limit exceeded",
            api_name=api_name,
            api_status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            details={"retry_after": retry_after, "retryable": True},
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            error_code="EXTERNAL_API_RATE_LIMITED"
        )


class APITimeoutError(ExternalAPIError):
    """Exception raised when an external API call exceeds its deadline."""

    def __init__(self, api_name: str, timeout_seconds: float = 30):
        super().__init__(
            message=f"{api_name} API request timed out after {timeout_seconds} seconds",
            api_name=api_name,
            details={
                "timeout_seconds": timeout_seconds,
                "retryable": True,
                "suggestion": "Retry after some time or check network"
            },
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            error_code="EXTERNAL_API_TIMEOUT"
        )
