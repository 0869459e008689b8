"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from studio_gallery.api.clients import router as clients_router
from studio_gallery.api.galleries import router as galleries_router
from studio_gallery.api.gallery import router as gallery_router
from studio_gallery.api.photos import router as photos_router
from studio_gallery.app_logging import configure_logging
from studio_gallery.containers import AppContainer
from studio_gallery.domain.errors import (
    AccessDeniedError,
    ConflictError,
    GalleryExpiredError,
    InvalidInputError,
    NotFoundError,
    StudioError,
)

_ERROR_STATUS: tuple[tuple[type[StudioError], int], ...] = (
    (InvalidInputError, 400),
    (AccessDeniedError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (GalleryExpiredError, 410),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Studio Gallery")
    app.state.container = container

    app.include_router(gallery_router)
    app.include_router(galleries_router)
    app.include_router(clients_router)
    app.include_router(photos_router)

    @app.exception_handler(StudioError)
    async def studio_error(request: Request, exc: StudioError) -> JSONResponse:
        return JSONResponse(
            status_code=error_status(exc), content={"error": exc.message}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": validation_message(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error", extra={"path": request.url.path}, exc_info=exc
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_status(exc: StudioError) -> int:
    """Map a domain error to its HTTP status code."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


def validation_message(exc: RequestValidationError) -> str:
    """Summarise the first request validation failure."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(
        str(part) for part in first.get("loc", ()) if part not in ("body", "query")
    )
    message = first.get("msg", "Invalid value")
    return f"Invalid request: {location}: {message}" if location else message
