"""
Artist Link Hub - FastAPI Application Entry Point

This module builds the FastAPI application: repositories and services on
app.state, middleware, routers, and the handlers that turn store errors
into HTTP responses.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkhub import __version__
from linkhub.core.config import Settings, get_settings
from linkhub.core.logging_config import get_logger, setup_logging
from linkhub.core.security import RevokedTokens
from linkhub.middleware.logging import LoggingMiddleware
from linkhub.middleware.rate_limit import RateLimitMiddleware
from linkhub.middleware.request_id import RequestIDMiddleware
from linkhub.repositories.events import EventRepository
from linkhub.repositories.links import LinkRepository
from linkhub.services.mailer import BookingMailer
from linkhub.store.errors import NotFound, Unauthorized, ValidationError

logger = get_logger(__name__)

VERSION = __version__


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    """Map store error kinds to distinct HTTP statuses with a JSON error body."""

    @app.exception_handler(Unauthorized)
    async def unauthorized_handler(request: Request, exc: Unauthorized) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, "Unauthorized")

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            str(exc),
            missing_fields=exc.missing_fields,
        )

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Not found" if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(
            422,
            "Invalid request",
            details=jsonable_encoder(exc.errors()),
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use (environment-loaded settings if omitted)

    Returns:
        Configured FastAPI instance
    """
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(level=settings.log_level, json_format=settings.log_json)
        Path(settings.data_directory).mkdir(parents=True, exist_ok=True)
        logger.info(
            "Artist Link Hub started",
            extra={"data_directory": settings.data_directory, "artist": settings.musician_name},
        )
        yield

    app = FastAPI(
        title=settings.project_name,
        version=VERSION,
        description="Artist link-in-bio site: links, events, click counts and booking inquiries",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    data_directory = Path(settings.data_directory)
    app.state.settings = settings
    app.state.links = LinkRepository(data_directory)
    app.state.events = EventRepository(data_directory)
    app.state.mailer = BookingMailer(settings)
    app.state.revoked_tokens = RevokedTokens()

    # Middleware runs in reverse order of registration
    app.add_middleware(
        RateLimitMiddleware,
        auth_limit=settings.auth_rate_limit,
        default_limit=settings.default_rate_limit,
        enabled=not settings.disable_rate_limit,
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    from linkhub.api.v1 import auth, contact, events, health, links

    app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
    app.include_router(links.router, prefix=settings.api_prefix, tags=["links"])
    app.include_router(events.router, prefix=settings.api_prefix, tags=["events"])
    app.include_router(contact.router, prefix=settings.api_prefix, tags=["contact"])
    app.include_router(auth.router, prefix=f"{settings.api_prefix}/admin", tags=["admin"])

    @app.get("/")
    async def root() -> dict:
        """Basic site information."""
        return {
            "name": settings.musician_name,
            "service": settings.project_name,
            "version": VERSION,
            "docs": "/docs",
        }

    return app


app = create_app()
