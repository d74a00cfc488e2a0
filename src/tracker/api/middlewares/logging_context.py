"""Per-request structlog context."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.tracker.core.logging import bind_request_context, clear_request_context


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id, method and path for the lifetime of the request.

    Context is cleared on both ends so nothing leaks between requests served
    by the same task.
    """
    clear_request_context()
    bind_request_context(correlation_id.get(), request.method, request.url.path)
    try:
        return await call_next(request)
    finally:
        clear_request_context()
