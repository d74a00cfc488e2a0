"""Database utilities - engine and session."""

from src.tracker.core.db.engine import build_engine, dispose_engine, get_engine
from src.tracker.core.db.session import get_session, init_models

__all__ = [
    # Engine
    "build_engine",
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    "init_models",
]
