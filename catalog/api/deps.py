"""
FastAPI dependencies for caller identity and the catalog service.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from catalog.kernel.identity.jwt import verify_access_token
from catalog.services.catalog_service import CatalogService


# Security scheme
security = HTTPBearer(auto_error=False)


def get_catalog_service(request: Request) -> CatalogService:
    """The process-wide service instance created in the app lifespan."""
    return request.app.state.catalog_service


Catalog = Annotated[CatalogService, Depends(get_catalog_service)]


async def get_caller(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> str:
    """Resolve the caller identity from the bearer token or raise 401."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload.sub


Caller = Annotated[str, Depends(get_caller)]


def get_request_id(request: Request) -> Optional[str]:
    """Get request correlation ID (set by RequestIdMiddleware)."""
    return getattr(request.state, "request_id", None)
