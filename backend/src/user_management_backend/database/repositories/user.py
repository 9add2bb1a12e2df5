"""Repository helpers for working with users."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.orm import Session

from user_management_backend.database.schemas import UserSchema


def _search_clause(search: str) -> ColumnElement[bool] | None:
    """Case-insensitive substring match over name, email and address."""
    if not search:
        return None
    return or_(
        UserSchema.name.icontains(search, autoescape=True),
        UserSchema.email.icontains(search, autoescape=True),
        UserSchema.address.icontains(search, autoescape=True),
    )


class UserRepository:
    """Encapsulates persistence operations for :class:`UserSchema`."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: UUID) -> UserSchema | None:
        """Return user entity by user's ID."""
        return self._session.get(UserSchema, user_id)

    def get_by_email(self, email: str) -> UserSchema | None:
        """Return user entity by its normalized email."""
        stmt = select(UserSchema).where(UserSchema.email == email)
        return self._session.scalar(stmt)

    def find(self, *, search: str = "", offset: int = 0, limit: int) -> list[UserSchema]:
        """Return one page of users matching *search* in storage order."""
        stmt = select(UserSchema)
        clause = _search_clause(search)
        if clause is not None:
            stmt = stmt.where(clause)
        stmt = stmt.offset(offset).limit(limit)
        return list(self._session.scalars(stmt))

    def count(self, *, search: str = "") -> int:
        """Return the number of users matching *search*."""
        stmt = select(func.count()).select_from(UserSchema)
        clause = _search_clause(search)
        if clause is not None:
            stmt = stmt.where(clause)
        return self._session.scalar(stmt) or 0

    def add(self, user: UserSchema) -> UserSchema:
        """Add new user to database."""
        self._session.add(user)
        self._session.flush()
        self._session.refresh(user)
        return user

    def update(self, user: UserSchema, changes: dict[str, Any]) -> UserSchema:
        """Apply *changes* to *user* and flush them."""
        for field, value in changes.items():
            setattr(user, field, value)
        self._session.flush()
        self._session.refresh(user)
        return user

    def delete(self, user: UserSchema) -> None:
        """Remove *user* from the database."""
        self._session.delete(user)
        self._session.flush()
