"""Pydantic models for user management endpoints."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Public representation of a stored user."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id_: UUID = Field(alias="id")
    name: str
    age: int
    email: str
    address: str | None = None
    created_at: datetime
    updated_at: datetime


class UserPageResponse(BaseModel):
    """Envelope returned by the paginated listing."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")
    data: list[UserResponse]


class UserMutationResponse(BaseModel):
    """Response returned after creating or updating a user."""

    message: str
    data: UserResponse


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Error payload shared by every endpoint."""

    error: str
