"""Root test fixtures shared across all test types.

Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-jwt-signing-0123456789abcdef")
# Cheap hashing keeps the suite fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ["RESEND_API_KEY"] = ""

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Generator
from unittest.mock import MagicMock

import pytest

from src.tracker.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def mock_send_invitation_email(monkeypatch: pytest.MonkeyPatch) -> Generator[MagicMock]:
    """Replace the invitation email transport with a MagicMock.

    Set ``side_effect`` on the returned mock to simulate delivery failures.
    """
    mock = MagicMock()
    monkeypatch.setattr("src.tracker.services.invitation_service.send_invitation_email", mock)
    yield mock


@pytest.fixture
def settings_override(monkeypatch: pytest.MonkeyPatch):
    """Override individual settings fields for one test.

    Usage: ``settings_override(enforce_project_limit=True)``
    """
    settings = get_settings()

    def _override(**values):
        for key, value in values.items():
            monkeypatch.setattr(settings, key, value)
        return settings

    return _override
