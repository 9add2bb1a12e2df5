"""Service layer for API-specific business logic."""

from user_management_backend.api.services.pagination import PageRequest
from user_management_backend.api.services.users import (
    InvalidUserIdError,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserPage,
    UserService,
    UserValidationError,
    parse_user_id,
)
from user_management_backend.api.services.validation import (
    ValidationResult,
    validate_user,
)

__all__ = [
    "InvalidUserIdError",
    "PageRequest",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserPage",
    "UserService",
    "UserValidationError",
    "ValidationResult",
    "parse_user_id",
    "validate_user",
]
