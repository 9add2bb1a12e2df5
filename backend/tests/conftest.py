"""Test configuration and fixtures for the backend test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from user_management_backend.api import create_api
from user_management_backend.database import DatabaseService
from user_management_backend.settings import get_settings

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Iterator

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure settings are loaded with predictable values during tests."""
    monkeypatch.setenv("DATABASE_URL", SQLITE_MEMORY_URL)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


async def _wait_for_task(task: asyncio.Task[None]) -> None:
    await task


def build_memory_database() -> DatabaseService:
    """Return a service bound to one shared in-memory SQLite connection."""
    return DatabaseService(
        SQLITE_MEMORY_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def empty_database() -> Iterator[DatabaseService]:
    """In-memory database without the users table."""
    service = build_memory_database()
    yield service
    service.dispose()


@pytest.fixture
def database() -> Iterator[DatabaseService]:
    service = build_memory_database()
    service.create_schema()
    yield service
    service.dispose()


@pytest.fixture
def client(database: DatabaseService) -> Iterator[TestClient]:
    app = create_api(database=database)
    with TestClient(app) as test_client:
        test_client.portal.call(_wait_for_task, app.state.database_ready)
        yield test_client
