"""Logging configuration using structlog.

All log calls go through structlog. Request scoped fields (request_id,
method, path, user_id) live in contextvars and are merged into every event.
"""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Third-party loggers that are chatty at INFO
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "httpx", "httpcore")


def setup_logging(debug: bool = False) -> None:
    """Configure structlog for structured logging.

    Args:
        debug: If True, use colored console output. If False, use JSON for production.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        # Tracebacks become a string field so each event stays one JSON line
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None, method: str | None = None, path: str | None = None
) -> None:
    """Bind request-level fields to all subsequent log calls.

    Args:
        request_id: The correlation ID for the current request.
        method: HTTP method.
        path: Request path without the query string (tokens travel in queries).
    """
    fields = {"request_id": request_id, "method": method, "path": path}
    bind_contextvars(**{key: value for key, value in fields.items() if value})


def bind_user_context(user_id: UUID, email: str | None = None) -> None:
    """Bind the authenticated user to all subsequent log calls.

    Args:
        user_id: The authenticated user's ID.
        email: Optional user email. Only logged if settings.log_user_emails is True.
    """
    from src.tracker.core.config import get_settings

    bind_contextvars(user_id=str(user_id))
    if email and get_settings().log_user_emails:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    clear_contextvars()
