"""Domain errors and the handlers that render them with request_id."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.tracker.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that surface to API clients.

    Every subclass carries a stable ``kind`` and an HTTP status so the
    handler below can render it without knowing the concrete type.
    """

    kind: str = "error"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(AppError):
    """A User, Project, Invitation, Subscription, Issue or Comment is missing."""

    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class Unauthorized(AppError):
    """The caller is authenticated but not allowed to act on the resource."""

    kind = "unauthorized"
    status_code = status.HTTP_403_FORBIDDEN


class Conflict(AppError):
    """State conflict, e.g. a single-use token consumed by another request."""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class DeliveryError(AppError):
    """Outbound notification transport failed."""

    kind = "delivery_error"
    status_code = status.HTTP_502_BAD_GATEWAY


class EntitlementExceeded(AppError):
    """The caller's subscription plan does not permit the action."""

    kind = "entitlement_exceeded"
    status_code = status.HTTP_403_FORBIDDEN


class AuthenticationError(AppError):
    """Missing, invalid or expired credentials."""

    kind = "authentication_error"
    status_code = status.HTTP_401_UNAUTHORIZED


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger.info(
            "Request failed",
            kind=exc.kind,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "kind": exc.kind,
                "detail": exc.message,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "kind": "http_error",
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "kind": "http_error",
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "kind": "internal_error",
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
