"""
Course Catalog

FastAPI application entry point. The HTTP layer only resolves the caller
identity and maps kernel failures to status codes; all catalog rules live
in ``catalog.services.catalog_service``.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.api.deps import Catalog, get_request_id
from catalog.api.middleware.request_id import RequestIdMiddleware, REQUEST_ID_HEADER
from catalog.api.v1 import router as api_v1_router
from catalog.config import get_settings
from catalog.database import async_session_maker, close_db, init_db
from catalog.kernel.errors import CatalogError, ErrorKind
from catalog.logging_config import configure_logging, get_logger
from catalog.schemas.common import HealthResponse
from catalog.services.catalog_service import CatalogService

settings = get_settings()
logger = get_logger(__name__)

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.BANNED: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_ARGUMENT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorKind.DUPLICATE: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown tasks.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    await init_db()
    app.state.catalog_service = CatalogService.from_settings(async_session_maker, settings)
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.project_name,
    description="""
    Course Catalog

    Persisted course records with owner / moderator / admin authorization
    and a ban list.

    ## Roles

    - **Owner**: the caller who created a course may update or delete it
    - **Moderator**: may update/delete any course and ban or unban creators
    - **Admin**: everything a moderator can do, plus managing moderators
    - **Banned**: may read but not create courses
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(RequestIdMiddleware)


def _error_response(request: Request, status_code: int, content: dict) -> JSONResponse:
    headers = {}
    req_id = get_request_id(request)
    if req_id:
        headers[REQUEST_ID_HEADER] = req_id
        content["request_id"] = req_id
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    """Map typed kernel failures to HTTP statuses."""
    return _error_response(request, ERROR_STATUS[exc.kind], exc.to_dict())


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    response = _error_response(request, exc.status_code, {"detail": exc.detail})
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
):
    """Handle request validation errors."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {"detail": "Validation error", "kind": ErrorKind.INVALID_ARGUMENT.value, "errors": errors},
    )


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception: %s", exc)
    if settings.debug:
        content = {"detail": str(exc), "type": type(exc).__name__}
    else:
        content = {"detail": "Internal server error"}
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, content)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(catalog: Catalog):
    """Check application health."""
    stats = await catalog.stats()
    return HealthResponse(
        status="ok",
        version=settings.version,
        database="connected",
        course_count=stats.course_count,
        next_course_id=stats.next_course_id,
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": {
            "v1": settings.api_v1_prefix,
        },
    }


app.include_router(
    api_v1_router,
    prefix=settings.api_v1_prefix,
)


# Main entry point for development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
