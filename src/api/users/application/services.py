"""User application service.

Owns the transaction for each use case, validates input before any
database call, and turns driver failures into UserStoreUnavailableError.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from users.application.observability import DefaultUserServiceProbe, UserServiceProbe
from users.domain import User, UserPatch
from users.ports.exceptions import (
    InvalidUserError,
    UserNotFoundError,
    UserStoreUnavailableError,
)
from users.ports.repositories import IUserRepository


class UserService:
    """Application service for user management."""

    def __init__(
        self,
        user_repository: IUserRepository,
        session: AsyncSession,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._session = session
        self._probe = probe or DefaultUserServiceProbe()

    @asynccontextmanager
    async def _transaction(
        self, operation: str, user_id: int | None = None
    ) -> AsyncIterator[None]:
        """Run one use case in a transaction, translating database failures.

        Domain exceptions raised inside the block roll the transaction back
        and propagate unchanged.
        """
        try:
            async with self._session.begin():
                yield
        except (SQLAlchemyError, OSError) as e:
            self._probe.user_store_unavailable(operation, e, user_id=user_id)
            raise UserStoreUnavailableError(
                f"Database unavailable during {operation}"
            ) from e

    def _require_text(self, operation: str, field: str, value: str) -> str:
        if not value.strip():
            reason = f"{field} must not be empty"
            self._probe.invalid_user_input(operation, reason)
            raise InvalidUserError(reason)
        return value

    async def create_user(self, name: str, email: str) -> User:
        """Create a user.

        Raises:
            InvalidUserError: If name or email is blank
            DuplicateEmailError: If the email is already in use
            UserStoreUnavailableError: If the database cannot serve the request
        """
        self._require_text("create_user", "name", name)
        self._require_text("create_user", "email", email)

        async with self._transaction("create_user"):
            user = await self._user_repository.create(name=name, email=email)

        self._probe.user_created(user.id, user.email)
        return user

    async def list_users(self) -> list[User]:
        """Return all users ordered by ID."""
        async with self._transaction("list_users"):
            users = await self._user_repository.list_all()
        return users

    async def get_user(self, user_id: int) -> User:
        """Return one user.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        async with self._transaction("get_user", user_id):
            user = await self._user_repository.get_by_id(user_id)

        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update_user(self, user_id: int, patch: UserPatch) -> User:
        """Replace the supplied fields of a user.

        Raises:
            InvalidUserError: If a supplied field is blank
            UserNotFoundError: If no user has this ID
            DuplicateEmailError: If the new email belongs to another user
        """
        if patch.name is not None:
            self._require_text("update_user", "name", patch.name)
        if patch.email is not None:
            self._require_text("update_user", "email", patch.email)

        async with self._transaction("update_user", user_id):
            user = await self._user_repository.update(user_id, patch)

        if user is None:
            raise UserNotFoundError(user_id)

        if not patch.is_empty():
            self._probe.user_updated(user_id, sorted(patch.as_values()))
        return user

    async def delete_user(self, user_id: int) -> None:
        """Delete a user.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        async with self._transaction("delete_user", user_id):
            deleted = await self._user_repository.delete_by_id(user_id)

        if not deleted:
            raise UserNotFoundError(user_id)

        self._probe.user_deleted(user_id)
