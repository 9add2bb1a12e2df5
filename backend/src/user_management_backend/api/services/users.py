"""User management domain logic."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from user_management_backend.api.services.pagination import PageRequest
from user_management_backend.api.services.validation import validate_user
from user_management_backend.database import UserRepository, UserSchema

logger = logging.getLogger(__name__)


class InvalidUserIdError(Exception):
    """Raised when a path identifier is not a well-formed user ID."""


class UserNotFoundError(Exception):
    """Raised when no user exists for a well-formed ID."""


class UserAlreadyExistsError(Exception):
    """Raised when an email is already owned by another user."""


class UserValidationError(Exception):
    """Raised when submitted fields break the user rules."""


@dataclass(slots=True)
class UserPage:
    """One page of users along with the unpaginated match count."""

    request: PageRequest
    total: int
    users: list[UserSchema]

    @property
    def total_pages(self) -> int:
        return self.request.total_pages(self.total)


def parse_user_id(raw: str) -> UUID:
    """Return *raw* as a UUID or raise :class:`InvalidUserIdError`."""
    try:
        return UUID(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidUserIdError(raw) from exc


class UserService:
    """Validates user payloads and delegates persistence to the repository."""

    def list_users(self, *, session: Session, request: PageRequest) -> UserPage:
        repository = UserRepository(session)
        users = repository.find(
            search=request.search, offset=request.offset, limit=request.limit
        )
        total = repository.count(search=request.search)
        return UserPage(request=request, total=total, users=users)

    def create_user(
        self, *, session: Session, payload: Mapping[str, Any]
    ) -> UserSchema:
        result = validate_user(payload)
        if not result.is_valid:
            raise UserValidationError(result.message)

        repository = UserRepository(session)
        email = result.values["email"]
        if repository.get_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        try:
            user = repository.add(UserSchema(**result.values))
        except IntegrityError as exc:
            raise UserAlreadyExistsError(email) from exc
        logger.info("Created user %s", user.id)
        return user

    def update_user(
        self, *, session: Session, user_id: str, payload: Mapping[str, Any]
    ) -> UserSchema:
        identifier = parse_user_id(user_id)
        result = validate_user(payload, partial=True)
        if not result.is_valid:
            raise UserValidationError(result.message)

        repository = UserRepository(session)
        user = repository.get_by_id(identifier)
        if user is None:
            raise UserNotFoundError(user_id)

        email = result.values.get("email")
        if email is not None:
            owner = repository.get_by_email(email)
            if owner is not None and owner.id != user.id:
                raise UserAlreadyExistsError(email)

        try:
            user = repository.update(user, result.values)
        except IntegrityError as exc:
            raise UserAlreadyExistsError(email) from exc
        logger.info("Updated user %s fields=%s", user.id, sorted(result.values))
        return user

    def delete_user(self, *, session: Session, user_id: str) -> None:
        identifier = parse_user_id(user_id)
        repository = UserRepository(session)
        user = repository.get_by_id(identifier)
        if user is None:
            raise UserNotFoundError(user_id)
        repository.delete(user)
        logger.info("Deleted user %s", identifier)


__all__ = [
    "InvalidUserIdError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserPage",
    "UserService",
    "UserValidationError",
    "parse_user_id",
]
