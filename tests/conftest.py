"""
Shared test fixtures.

The Supabase and Gemini clients are replaced with ``MagicMock`` fakes;
no network access and no display are needed.
"""

import io
import os
import uuid
from unittest.mock import MagicMock

import pytest

# Required settings must exist before any config is built.
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

from lore.database import DatabaseManager  # noqa: E402
from lore.logger import StructuredLogger  # noqa: E402
from lore.models.session import Session  # noqa: E402
from tests.fakes import USER_EMAIL, USER_ID  # noqa: E402


# ============================================================================
# Logging
# ============================================================================

@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(log_stream: io.StringIO) -> StructuredLogger:
    """Logger writing JSON lines into ``log_stream`` only.

    Each test gets a unique logger name so handlers never leak between
    tests.
    """
    return StructuredLogger(name=f"test.{uuid.uuid4().hex}", stream=log_stream)


# ============================================================================
# Supabase
# ============================================================================

@pytest.fixture
def supabase_client() -> MagicMock:
    return MagicMock(name="supabase_client")


@pytest.fixture
def db(supabase_client: MagicMock, logger: StructuredLogger) -> DatabaseManager:
    return DatabaseManager(
        supabase_url="",
        supabase_key="",
        logger=logger,
        client=supabase_client,
    )


@pytest.fixture
def session() -> Session:
    return Session(
        access_token="access-token",
        refresh_token="refresh-token",
        expires_at=1_900_000_000,
        user_id=USER_ID,
        email=USER_EMAIL,
    )

