"""
Signed caller-identity tokens.

The HTTP host trusts only the ``sub`` claim of a valid token as the
caller identity; the kernel never sees the token itself.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from catalog.config import get_settings


class AccessTokenPayload(BaseModel):
    """JWT access token payload."""

    sub: str  # Caller identity (principal)
    exp: datetime
    iat: datetime
    jti: str

    class Config:
        from_attributes = True


class IdentityTokenManager:
    """
    JWT creation and verification for caller identities.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expire_minutes: Optional[int] = None,
    ):
        settings = get_settings()
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm
        self.access_token_expire_minutes = (
            access_token_expire_minutes or settings.access_token_expire_minutes
        )

    def create_access_token(
        self,
        principal: str,
        expires_delta: Optional[timedelta] = None,
    ) -> tuple[str, datetime, str]:
        """
        Create a new access token for ``principal``.

        Args:
            principal: Caller identity to embed as ``sub``
            expires_delta: Optional custom expiration time

        Returns:
            Tuple of (token, expiration_datetime, token_id)
        """
        if not principal:
            raise ValueError("principal must be non-empty")

        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))
        jti = str(uuid.uuid4())

        payload = {
            "sub": principal,
            "exp": expire,
            "iat": now,
            "jti": jti,
            "type": "access",
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return token, expire, jti

    def verify_access_token(self, token: str) -> Optional[AccessTokenPayload]:
        """
        Verify and decode an access token.

        Returns:
            AccessTokenPayload if valid, None otherwise
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
            )
        except JWTError:
            return None

        if payload.get("type") != "access" or not payload.get("sub"):
            return None

        return AccessTokenPayload(
            sub=payload["sub"],
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            jti=payload.get("jti", ""),
        )


# Default manager instance
_token_manager: Optional[IdentityTokenManager] = None


def get_token_manager() -> IdentityTokenManager:
    """Get or create the default token manager."""
    global _token_manager
    if _token_manager is None:
        _token_manager = IdentityTokenManager()
    return _token_manager


def create_access_token(
    principal: str,
    expires_delta: Optional[timedelta] = None,
) -> tuple[str, datetime, str]:
    """Create an access token."""
    return get_token_manager().create_access_token(principal, expires_delta)


def verify_access_token(token: str) -> Optional[AccessTokenPayload]:
    """Verify an access token."""
    return get_token_manager().verify_access_token(token)
