"""Models used for API request and response payloads."""

from user_management_backend.api.models.user import (
    ErrorResponse,
    MessageResponse,
    UserMutationResponse,
    UserPageResponse,
    UserResponse,
)

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "UserMutationResponse",
    "UserPageResponse",
    "UserResponse",
]
