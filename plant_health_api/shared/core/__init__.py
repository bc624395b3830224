"""
Core utilities package for the Plant Health API.
Provides security, dependencies, exceptions and concurrency helpers.
"""

from .exceptions import (
    PlantHealthException,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    NotFoundError,
    RateLimitError,
    ExternalAPIError,
    APIAuthenticationError,
    APIRateLimitError,
    APITimeoutError,
    DatabaseError,
    RepositoryError,
)

__all__ = [
    "PlantHealthException",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "RateLimitError",
    "ExternalAPIError",
    "APIAuthenticationError",
    "APIRateLimitError",
    "APITimeoutError",
    "DatabaseError",
    "RepositoryError",
]
