"""
Main entrypoint for the Crew Roster API.

``create_app`` builds and configures the FastAPI application: logging,
CORS, the roster routes, the uploaded-photo mount and the exception
handlers that turn domain errors into JSON responses.  A default
instance is created at import time as ``app`` so it can be served
directly::

    uvicorn crew_roster_api.app.main:app --reload

Each application owns its own ``RosterService`` on ``app.state``, so
separate apps (for example one per test) never share roster data.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.endpoints import testing
from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.errors import (
    InvalidInput,
    NotFound,
    RosterError,
    TooLarge,
    UnsupportedFormat,
    describe_validation_errors,
)
from .core.logging_config import setup_logging
from .services.photo_store import LocalPhotoStore, PhotoStore
from .services.roster_service import RosterService

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, kind: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "kind": kind})


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and HTTP errors to ``{"error", "kind"}`` bodies; anything else is a 500."""

    @app.exception_handler(RosterError)
    async def roster_error_handler(request: Request, exc: RosterError) -> JSONResponse:
        if isinstance(exc, (UnsupportedFormat, TooLarge)):
            logger.warning("Rejected photo upload on %s: %s", request.url.path, exc.message)
        status_code = status.HTTP_404_NOT_FOUND if isinstance(exc, NotFound) else status.HTTP_400_BAD_REQUEST
        return _error_response(status_code, exc.message, exc.kind)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Raised by routing and by FastAPI body parsing
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            kind = NotFound.kind
        elif exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
            kind = InvalidInput.kind
        else:
            kind = "InternalError"
        response = _error_response(exc.status_code, str(exc.detail), kind)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            describe_validation_errors(exc.errors()),
            InvalidInput.kind,
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error.",
            "InternalError",
        )


def create_app(
    app_settings: Optional[Settings] = None,
    photo_store: Optional[PhotoStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``.
    photo_store : Optional[PhotoStore]
        Photo store for rower pictures.  Defaults to a
        ``LocalPhotoStore`` writing into ``app_settings.uploads_path``.

    Returns
    -------
    FastAPI
        A configured application with a freshly seeded roster.
    """
    cfg = app_settings or settings
    setup_logging(cfg.log_level, cfg.log_file or None)

    uploads_path = cfg.uploads_path
    if photo_store is None:
        photo_store = LocalPhotoStore(uploads_path, cfg.uploads_url_prefix, cfg.max_photo_bytes)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s %s (%s)", cfg.project_name, cfg.api_version, cfg.environment)
        uploads_path.mkdir(parents=True, exist_ok=True)
        yield
        logger.info("Shutting down %s", cfg.project_name)

    app = FastAPI(title=cfg.project_name, version=cfg.api_version, lifespan=lifespan)
    app.state.settings = cfg
    app.state.roster_service = RosterService(photo_store=photo_store)

    # Without explicit origins every origin is allowed, but credentials are not.
    cors_origins = cfg.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_credentials=bool(cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(v1_router)
    if cfg.test_routes_enabled:
        app.include_router(testing.router, prefix="/test", tags=["test"])

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "healthy"}

    app.mount(
        cfg.uploads_url_prefix,
        StaticFiles(directory=str(uploads_path), check_dir=False),
        name="uploads",
    )

    register_exception_handlers(app)
    return app


# Create the application instance at import time so that uvicorn can
# discover it without calling create_app manually.
app = create_app()
