"""API middleware for the storefront catalog API.

Provides:
- Admin API key authentication for mutating requests
- Request ID correlation
- Error handling
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = structlog.get_logger()


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to request state, log context and response headers."""

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=getattr(response, "status_code", 500),
                duration_ms=round(duration_ms, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id
        return response


# ============================================================================
# Admin API Key Middleware
# ============================================================================


# Reads are public; every other method is an admin mutation
SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


def _unauthorized(error_code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "error_code": error_code,
            "message": message,
            "details": [],
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Require ``Authorization: Bearer <admin key>`` on mutating requests.

    Authenticated requests may name the acting admin in ``X-Actor``; it
    is recorded in the audit log and nowhere else.
    """

    ACTOR_HEADER = "X-Actor"

    def __init__(self, app: ASGIApp, api_key: str) -> None:
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Validate the admin key for non-read requests.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or 401 error.
        """
        if request.method in SAFE_METHODS:
            return await call_next(request)

        path = request.url.path
        auth_header = request.headers.get("Authorization")

        if not auth_header:
            logger.warning("Missing authorization header", path=path, method=request.method)
            return _unauthorized("UNAUTHORIZED", "Missing Authorization header")

        parts = auth_header.split(" ", 1)
        if len(parts) != 2 or parts[0].lower() != "bearer":
            logger.warning("Invalid authorization format", path=path, method=request.method)
            return _unauthorized(
                "UNAUTHORIZED",
                "Invalid Authorization header format. Use 'Bearer <api_key>'",
            )

        if parts[1] != self.api_key:
            logger.warning("Invalid API key", path=path, method=request.method)
            return _unauthorized("INVALID_API_KEY", "Invalid API key")

        request.state.authenticated = True
        request.state.actor = request.headers.get(self.ACTOR_HEADER) or None

        return await call_next(request)


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn exceptions escaping the app into the standard 500 envelope."""

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            request_id = getattr(request.state, "request_id", None)

            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error_code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "details": [],
                    "request_id": request_id,
                },
            )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI, api_key: str) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed).

    Args:
        app: FastAPI application instance.
        api_key: Admin API key required on mutating requests.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(ApiKeyMiddleware, api_key=api_key)
    app.add_middleware(RequestIdMiddleware)
