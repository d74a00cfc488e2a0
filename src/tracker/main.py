from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.tracker.api.middlewares import logging_context_middleware
from src.tracker.api.routes.router import api_router
from src.tracker.core.config import get_settings
from src.tracker.core.db import dispose_engine, get_session, init_models
from src.tracker.core.exceptions import setup_exception_handlers
from src.tracker.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    if settings.auto_create_tables:
        await init_models()

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Signup and signin"},
    {"name": "users", "description": "User profile operations"},
    {"name": "projects", "description": "Projects, teams and invitations"},
    {"name": "subscriptions", "description": "Subscription plans"},
    {"name": "issues", "description": "Project issues"},
    {"name": "comments", "description": "Issue comments"},
    {"name": "messages", "description": "Project chat messages"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Collaborative project tracking API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)

    app.middleware("http")(logging_context_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    # Outermost, so the correlation id exists for everything inside
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(api_router)

    @app.get("/health")
    async def health() -> JSONResponse:
        """Health check with a database round trip."""
        try:
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Health check failed", error=str(e))
            return JSONResponse(
                content={"status": "unhealthy", "database": f"unhealthy: {e}"},
                status_code=503,
            )
        return JSONResponse(content={"status": "healthy", "database": "healthy"})

    return app


app = create_app()
