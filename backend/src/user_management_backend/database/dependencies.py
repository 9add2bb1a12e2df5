"""FastAPI dependencies for database access."""

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from user_management_backend.database.service import DatabaseService


def get_database(request: Request) -> DatabaseService:
    """Return the :class:`DatabaseService` the application was built with."""
    return request.app.state.database


def get_session(
    db: Annotated[DatabaseService, Depends(get_database)],
) -> Iterator[Session]:
    """Yield a SQLAlchemy session managed by :class:`DatabaseService`."""
    with db.session() as session:
        yield session
