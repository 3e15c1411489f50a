"""Repository protocol (port) for the users bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from users.domain import User, UserPatch


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User persistence.

    Every method issues exactly one SQL statement. Transactions are owned
    by the caller.
    """

    async def create(self, name: str, email: str) -> User:
        """Insert a user and return the stored row.

        Raises:
            DuplicateEmailError: If the email is already in use
        """
        ...

    async def list_all(self) -> list[User]:
        """Return every user ordered by ID ascending."""
        ...

    async def get_by_id(self, user_id: int) -> User | None:
        """Return the user, or None if not found."""
        ...

    async def update(self, user_id: int, patch: UserPatch) -> User | None:
        """Apply the supplied fields and return the updated row.

        Returns:
            The updated User, or None if no row has that ID

        Raises:
            DuplicateEmailError: If the new email belongs to another user
        """
        ...

    async def delete_by_id(self, user_id: int) -> int:
        """Delete the user and return the number of rows removed (0 or 1)."""
        ...
