"""
Common FastAPI dependencies for the Plant Health API.
Provides bearer token authentication and pagination parameters.
"""

from typing import List, Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config.settings import get_settings
from ..utils.logging import bind_user
from .exceptions import AuthenticationError
from .security import get_security_manager

# Security scheme for OpenAPI documentation
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """User information extracted from JWT token."""

    def __init__(
        self,
        user_id: str,
        email: Optional[str] = None,
        roles: Optional[List[str]] = None,
    ):
        self.user_id = user_id
        self.email = email
        self.roles = roles or ["user"]

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def is_admin(self) -> bool:
        return self.has_role("admin")

    def resolve_user_id(self, user_id: str) -> str:
        """Translate the "me" path alias into the caller's own id."""
        return self.user_id if user_id == "me" else user_id


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Resolve the caller from the Authorization bearer token.

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing bearer token")

    token_data = get_security_manager().verify_token(credentials.credentials)
    bind_user(token_data.user_id)
    return CurrentUser(
        user_id=token_data.user_id,
        email=token_data.email,
        roles=token_data.roles,
    )


class PaginationParams:
    """Pagination parameters for list endpoints."""

    def __init__(self, page: int = 1, limit: int = 20):
        self.page = page
        self.limit = limit


def get_pagination_params(
    page: int = Query(1, description="1-based page number"),
    limit: Optional[int] = Query(None, description="Items per page (capped server side)"),
) -> PaginationParams:
    """
    Dependency for pagination parameters.

    Values are passed through unchecked; the query engines validate them so
    the same rules apply to internal callers.
    """
    if limit is None:
        limit = get_settings().HISTORY_DEFAULT_LIMIT
    return PaginationParams(page=page, limit=limit)
