"""Startup and failure-path behaviour of the application factory."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import TYPE_CHECKING
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from user_management_backend.api import create_api
from user_management_backend.database import DatabaseService

if TYPE_CHECKING:
    from pathlib import Path

    import pytest
    from fastapi import FastAPI


async def _wait_for(task: asyncio.Task[None]) -> None:
    await task


def _wait_until_database_ready(client: TestClient, app: FastAPI) -> None:
    """Block until the background schema task has finished."""
    client.portal.call(_wait_for, app.state.database_ready)


def test_startup_creates_users_table(empty_database: DatabaseService) -> None:
    app = create_api(database=empty_database)

    with TestClient(app) as client:
        _wait_until_database_ready(client, app)
        response = client.get("/api/users")

    assert response.status_code == 200
    assert response.json()["data"] == []


def test_startup_does_not_wait_for_database(
    database: DatabaseService, caplog: pytest.LogCaptureFixture
) -> None:
    release = threading.Event()

    def blocked_create_schema() -> None:
        release.wait(timeout=5)
        raise OperationalError("CREATE TABLE users", {}, Exception("unreachable"))

    database.create_schema = blocked_create_schema  # type: ignore[method-assign]
    app = create_api(database=database)

    with caplog.at_level(logging.ERROR), TestClient(app) as client:
        started = time.perf_counter()
        response = client.get("/api/users")
        elapsed = time.perf_counter() - started
        release.set()
        _wait_until_database_ready(client, app)

    assert response.status_code == 200
    assert elapsed < 1.0
    assert "Database connection failed" in caplog.text


def test_startup_survives_unreachable_database(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    database = DatabaseService(f"sqlite:///{tmp_path / 'missing' / 'users.db'}")
    app = create_api(database=database)

    with caplog.at_level(logging.ERROR), TestClient(app) as client:
        _wait_until_database_ready(client, app)
        listing = client.get("/api/users")
        created = client.post(
            "/api/users", json={"name": "Jon", "age": 30, "email": "jon@x.com"}
        )
        deleted = client.delete(f"/api/users/{uuid4()}")

    assert "Database connection failed" in caplog.text
    assert listing.status_code == 500
    assert listing.json()["error"]
    assert created.status_code == 400
    assert created.json()["error"]
    assert deleted.status_code == 400
    assert "unable to open database file" in deleted.json()["error"]


def test_list_reports_persistence_failure_as_server_error(
    empty_database: DatabaseService,
) -> None:
    client = TestClient(create_api(database=empty_database))

    response = client.get("/api/users")

    assert response.status_code == 500
    assert "users" in response.json()["error"]
