"""HTTP routes for user management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from users.application.services import UserService
from users.dependencies import get_user_service
from users.ports.exceptions import (
    DuplicateEmailError,
    InvalidUserError,
    UserNotFoundError,
    UserStoreUnavailableError,
)
from users.presentation.models import (
    CreateUserRequest,
    ErrorResponse,
    UpdateUserRequest,
    UserResponse,
)

# users.id is a PostgreSQL INTEGER
_INT4_MIN = -(2**31)
_INT4_MAX = 2**31 - 1

UserId = Annotated[int, Path(description="User ID", ge=_INT4_MIN, le=_INT4_MAX)]

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        503: {"model": ErrorResponse, "description": "Database unavailable"},
    },
)


def _unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Database temporarily unavailable",
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Email already in use"}},
)
async def create_user(
    request: CreateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a new user.

    Args:
        request: User creation request (name, email)
        service: User service for orchestration

    Returns:
        UserResponse with the stored user, including its generated ID

    Raises:
        HTTPException: 400 if a field is blank
        HTTPException: 409 if the email already exists
        HTTPException: 503 if the database is unavailable
    """
    try:
        user = await service.create_user(name=request.name, email=request.email)
        return UserResponse.from_domain(user)

    except InvalidUserError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except DuplicateEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        ) from e
    except UserStoreUnavailableError as e:
        raise _unavailable() from e


@router.get("")
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserResponse]:
    """List all users ordered by ID."""
    try:
        users = await service.list_users()
        return [UserResponse.from_domain(u) for u in users]

    except UserStoreUnavailableError as e:
        raise _unavailable() from e


@router.get(
    "/{user_id}",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(
    user_id: UserId,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get user by ID.

    Raises:
        HTTPException: 404 if the user does not exist
        HTTPException: 503 if the database is unavailable
    """
    try:
        user = await service.get_user(user_id)
        return UserResponse.from_domain(user)

    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found",
        ) from e
    except UserStoreUnavailableError as e:
        raise _unavailable() from e


@router.put(
    "/{user_id}",
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Email already in use"},
    },
)
async def update_user(
    user_id: UserId,
    request: UpdateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Update a user.

    Only the fields present in the body are changed.

    Args:
        user_id: User ID
        request: Fields to replace (name, email)
        service: User service

    Returns:
        UserResponse with the user as stored after the update

    Raises:
        HTTPException: 400 if a supplied field is blank
        HTTPException: 404 if the user does not exist
        HTTPException: 409 if the new email belongs to another user
        HTTPException: 503 if the database is unavailable
    """
    try:
        user = await service.update_user(user_id, request.to_patch())
        return UserResponse.from_domain(user)

    except InvalidUserError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found",
        ) from e
    except DuplicateEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        ) from e
    except UserStoreUnavailableError as e:
        raise _unavailable() from e


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "User deleted successfully"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def delete_user(
    user_id: UserId,
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    """Delete a user.

    Returns:
        None (204 No Content on success)

    Raises:
        HTTPException: 404 if the user does not exist
        HTTPException: 503 if the database is unavailable
    """
    try:
        await service.delete_user(user_id)

    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found",
        ) from e
    except UserStoreUnavailableError as e:
        raise _unavailable() from e
