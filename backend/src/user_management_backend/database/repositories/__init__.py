"""Repositories wrapping SQLAlchemy sessions."""

from user_management_backend.database.repositories.user import UserRepository

__all__ = ["UserRepository"]
