"""
Identity Core - caller identity tokens.
"""

from catalog.kernel.identity.jwt import (
    IdentityTokenManager,
    AccessTokenPayload,
    create_access_token,
    get_token_manager,
    verify_access_token,
)

__all__ = [
    "IdentityTokenManager",
    "AccessTokenPayload",
    "create_access_token",
    "get_token_manager",
    "verify_access_token",
]
