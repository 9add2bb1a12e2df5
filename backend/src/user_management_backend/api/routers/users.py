"""User management endpoints."""

from __future__ import annotations

import logging
from typing import Any, NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from user_management_backend.api.dependencies import get_user_service
from user_management_backend.api.models import (
    ErrorResponse,
    MessageResponse,
    UserMutationResponse,
    UserPageResponse,
    UserResponse,
)
from user_management_backend.api.services import (
    InvalidUserIdError,
    PageRequest,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserService,
    UserValidationError,
)
from user_management_backend.database import get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

EMAIL_TAKEN = "Email already exists"
USER_NOT_FOUND = "User not found"
INVALID_USER_ID = "Invalid user ID"

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
}


def _raise_write_error(exc: Exception) -> NoReturn:
    """Translate a service exception raised on a write path."""
    if isinstance(exc, InvalidUserIdError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_USER_ID
        ) from exc
    if isinstance(exc, UserNotFoundError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND
        ) from exc
    if isinstance(exc, UserAlreadyExistsError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_TAKEN
        ) from exc
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
    ) from exc


_WRITE_ERRORS = (
    InvalidUserIdError,
    UserNotFoundError,
    UserAlreadyExistsError,
    UserValidationError,
    SQLAlchemyError,
)


@router.get(
    "",
    response_model=UserPageResponse,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
)
def list_users(
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    session: Session = Depends(get_session),
    user_service: UserService = Depends(get_user_service),
) -> UserPageResponse:
    """Return a page of users, optionally filtered by a search term."""

    request = PageRequest.from_query(page=page, limit=limit, search=search)
    try:
        result = user_service.list_users(session=session, request=request)
    except SQLAlchemyError as exc:
        logger.exception("Listing users failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc

    return UserPageResponse(
        page=request.page,
        limit=request.limit,
        total=result.total,
        total_pages=result.total_pages,
        data=[UserResponse.model_validate(user) for user in result.users],
    )


@router.post(
    "",
    response_model=UserMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
def create_user(
    payload: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    user_service: UserService = Depends(get_user_service),
) -> UserMutationResponse:
    """Create a user from ``name``, ``age``, ``email`` and ``address``."""

    try:
        user = user_service.create_user(session=session, payload=payload)
    except _WRITE_ERRORS as exc:
        _raise_write_error(exc)

    return UserMutationResponse(
        message="User created successfully",
        data=UserResponse.model_validate(user),
    )


@router.put(
    "/{user_id}",
    response_model=UserMutationResponse,
    responses={**_ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def update_user(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    user_service: UserService = Depends(get_user_service),
) -> UserMutationResponse:
    """Apply a partial update to an existing user."""

    try:
        user = user_service.update_user(
            session=session, user_id=user_id, payload=payload
        )
    except _WRITE_ERRORS as exc:
        _raise_write_error(exc)

    return UserMutationResponse(
        message="User updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={**_ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def delete_user(
    user_id: str,
    session: Session = Depends(get_session),
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Delete a user by ID."""

    try:
        user_service.delete_user(session=session, user_id=user_id)
    except _WRITE_ERRORS as exc:
        _raise_write_error(exc)

    return MessageResponse(message="User deleted successfully")
