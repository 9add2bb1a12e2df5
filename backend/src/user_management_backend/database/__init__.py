"""Database connectivity helpers and configuration objects."""

from user_management_backend.database.base import BaseSchema
from user_management_backend.database.dependencies import get_database, get_session
from user_management_backend.database.repositories import UserRepository
from user_management_backend.database.schemas import UserSchema
from user_management_backend.database.service import DatabaseService

__all__ = [
    "BaseSchema",
    "DatabaseService",
    "UserRepository",
    "UserSchema",
    "get_database",
    "get_session",
]
