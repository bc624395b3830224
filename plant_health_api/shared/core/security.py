"""
Security utilities for the Plant Health API.
Issues and verifies the HS256 bearer tokens that identify the calling user.
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from ..config.settings import get_settings
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class TokenData(BaseModel):
    """Token payload data structure"""
    user_id: str
    email: Optional[str] = None
    roles: list = ["user"]


class SecurityManager:
    """
    Centralized JWT handling.

    Account creation and login live outside this service; it only needs to
    verify the tokens it is handed, and to mint them for tooling and tests.
    """

    def __init__(self):
        self.settings = get_settings()
        self.algorithm = self.settings.JWT_ALGORITHM
        self.secret_key = self.settings.JWT_SECRET_KEY
        self.access_token_expire_minutes = self.settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create JWT access token with user data and expiration.

        Args:
            data: Token payload data, must include "sub"
            expires_delta: Custom expiration time

        Returns:
            str: Encoded JWT token
        """
        to_encode = data.copy()
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))
        to_encode.update({"exp": expire, "iat": now, "type": "access"})

        encoded_jwt = jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user: {data.get('sub')}")
        return encoded_jwt

    def verify_token(self, token: str) -> TokenData:
        """
        Verify and decode an access token.

        Args:
            token: JWT token to verify

        Returns:
            TokenData: Identity carried by the token

        Raises:
            AuthenticationError: If the token is invalid, expired or not an access token
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise AuthenticationError("Could not validate credentials")

        if payload.get("type") != "access":
            logger.warning(f"Token type mismatch. Got: {payload.get('type')}")
            raise AuthenticationError("Could not validate credentials")

        user_id = payload.get("sub")
        if not user_id:
            logger.warning("Token missing subject (user_id)")
            raise AuthenticationError("Could not validate credentials")

        return TokenData(
            user_id=str(user_id),
            email=payload.get("email"),
            roles=payload.get("roles") or ["user"],
        )


@lru_cache()
def get_security_manager() -> SecurityManager:
    """Get the process wide security manager."""
    return SecurityManager()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    return get_security_manager().create_access_token(data, expires_delta)


def verify_token(token: str) -> TokenData:
    return get_security_manager().verify_token(token)
