"""Database session management utilities."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from user_management_backend.database.base import BaseSchema
from user_management_backend.settings import BackendSettings, get_settings

logger = logging.getLogger(__name__)


class DatabaseService:
    """Wraps SQLAlchemy engine and session factory.

    Instances are built once per application and handed to
    :func:`user_management_backend.api.create_api`; nothing in the package
    keeps a module-level engine.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        settings: BackendSettings | None = None,
        **engine_options: Any,
    ) -> None:
        config = settings or get_settings()
        self._url = url or config.database_url
        self._engine = create_engine(self._url, **engine_options)
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            class_=Session,
        )

    @property
    def safe_url(self) -> str:
        """Connection string with the password masked, suitable for logs."""

        return make_url(self._url).render_as_string(hide_password=True)

    def create_schema(self) -> None:
        """Create missing tables and indexes for all registered schemas."""

        BaseSchema.metadata.create_all(self._engine)
        logger.info("Database schema ready at %s", self.safe_url)

    def dispose(self) -> None:
        """Close pooled connections held by the engine."""

        self._engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Provide a transactional session scope."""

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
