"""SQLAlchemy schemas."""

from user_management_backend.database.schemas.user import UserSchema

__all__ = ["UserSchema"]
