"""Storefront catalog API main application module.

This module builds the FastAPI application and configures core
middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.brands import router as brands_router
from storefront.api.categories import router as categories_router
from storefront.api.errors import error_code_for, error_details_for, status_for_code
from storefront.api.health import router as health_router
from storefront.api.middleware import setup_middleware
from storefront.api.search import router as search_router
from storefront.api.sections import router as sections_router
from storefront.catalog.query_service import TaxonomyQueryService
from storefront.catalog.store import TaxonomyStore
from storefront.domain.exceptions import DomainError
from storefront.infrastructure.config import Settings
from storefront.infrastructure.config import settings as default_settings
from storefront.infrastructure.database import (
    create_engine,
    create_session_factory,
    create_tables,
)
from storefront.infrastructure.icon_storage import IconStorage, IconStorageClient
from storefront.infrastructure.logging_config import configure_logging

logger = structlog.get_logger()


def _error_content(
    request: Request,
    error_code: str,
    message: str,
    details: list | None = None,
) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "details": details or [],
        "request_id": getattr(request.state, "request_id", None),
    }


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        """Map taxonomy rule violations onto the standard envelope."""
        error_code = error_code_for(exc)
        status_code = status_for_code(error_code)
        if status_code >= 500:
            logger.warning(
                "Domain error",
                path=request.url.path,
                error_code=error_code,
                error=exc.message,
            )
        return JSONResponse(
            status_code=status_code,
            content=_error_content(request, error_code, exc.message, error_details_for(exc)),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies and parameters field by field."""
        details = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content=_error_content(request, "VALIDATION_ERROR", "Invalid request", details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with consistent format."""
        detail = exc.detail
        if isinstance(detail, dict):
            error_code = detail.get("error_code", "ERROR")
            message = detail.get("message", str(detail))
            details = detail.get("details", [])
        else:
            error_code = "NOT_FOUND" if exc.status_code == 404 else "ERROR"
            message = str(detail)
            details = []

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_content(request, error_code, message, details),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions with consistent format."""
        logger.exception(
            "Unhandled exception in handler",
            path=request.url.path,
            method=request.method,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content=_error_content(request, "INTERNAL_ERROR", "An internal error occurred"),
        )


def create_app(
    settings: Settings | None = None,
    icon_storage: IconStorage | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use; defaults to the environment settings.
        icon_storage: Icon storage to use; defaults to an HTTP client
            built from settings.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        configure_logging(settings.log_level)
        logger.info(
            "Starting storefront API",
            version=settings.api_version,
            debug=settings.debug,
        )

        engine = create_engine(settings.database_url, echo=settings.debug)
        if settings.create_tables:
            await create_tables(engine)
        session_factory = create_session_factory(engine)

        storage = icon_storage or IconStorageClient.from_settings(settings)
        app.state.engine = engine
        app.state.store = TaxonomyStore(session_factory, storage)
        app.state.queries = TaxonomyQueryService(session_factory)

        yield

        logger.info("Shutting down storefront API")
        if isinstance(storage, IconStorageClient):
            await storage.close()
        await engine.dispose()

    app = FastAPI(
        title="Storefront Catalog API",
        description="Catalog taxonomy, filter facets and search parameters for the storefront",
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_middleware(app, api_key=settings.admin_api_key)

    app.include_router(health_router, tags=["Health"])
    app.include_router(sections_router)
    app.include_router(categories_router)
    app.include_router(brands_router)
    app.include_router(search_router)

    _register_exception_handlers(app)
    return app


app = create_app()
