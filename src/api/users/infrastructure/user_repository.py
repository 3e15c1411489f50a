"""PostgreSQL implementation of IUserRepository.

Each method issues one SQLAlchemy Core statement with bound parameters.
Writes use RETURNING so the caller gets the stored row, including the
database-generated id and timestamps, in the same round trip.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from users.domain import User, UserPatch
from users.infrastructure.models import UNIQUE_EMAIL_CONSTRAINT, UserModel
from users.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from users.ports.exceptions import DuplicateEmailError
from users.ports.repositories import IUserRepository

# SQLSTATE for unique_violation
_UNIQUE_VIOLATION = "23505"

_users = UserModel.__table__


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for users.

    The repository never opens transactions itself; the application
    service wraps each call in ``session.begin()``.
    """

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def create(self, name: str, email: str) -> User:
        """Insert a user and return the stored row.

        Raises:
            DuplicateEmailError: If the email is already in use
        """
        stmt = insert(_users).values(name=name, email=email).returning(*_users.c)
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as e:
            if _is_duplicate_email(e):
                self._probe.duplicate_email(email)
                raise DuplicateEmailError(email) from e
            raise

        user = _to_domain(result.one())
        self._probe.user_inserted(user.id)
        return user

    async def list_all(self) -> list[User]:
        """Return every user ordered by ID ascending."""
        stmt = select(_users).order_by(_users.c.id)
        result = await self._session.execute(stmt)
        users = [_to_domain(row) for row in result.all()]

        self._probe.users_listed(len(users))
        return users

    async def get_by_id(self, user_id: int) -> User | None:
        """Return the user, or None if not found."""
        stmt = select(_users).where(_users.c.id == user_id)
        result = await self._session.execute(stmt)
        row = result.one_or_none()

        if row is None:
            self._probe.user_not_found(user_id)
            return None

        self._probe.user_retrieved(user_id)
        return _to_domain(row)

    async def update(self, user_id: int, patch: UserPatch) -> User | None:
        """Apply the supplied fields and return the updated row.

        An empty patch updates nothing and returns the current row.

        Raises:
            DuplicateEmailError: If the new email belongs to another user
        """
        values = patch.as_values()
        if not values:
            return await self.get_by_id(user_id)

        stmt = (
            update(_users)
            .where(_users.c.id == user_id)
            .values(**values)
            .returning(*_users.c)
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as e:
            if patch.email is not None and _is_duplicate_email(e):
                self._probe.duplicate_email(patch.email)
                raise DuplicateEmailError(patch.email) from e
            raise

        row = result.one_or_none()
        if row is None:
            self._probe.user_not_found(user_id)
            return None

        self._probe.user_row_updated(user_id, sorted(values))
        return _to_domain(row)

    async def delete_by_id(self, user_id: int) -> int:
        """Delete the user and return the number of rows removed."""
        stmt = delete(_users).where(_users.c.id == user_id).returning(_users.c.id)
        result = await self._session.execute(stmt)
        deleted = len(result.scalars().all())

        if deleted:
            self._probe.user_row_deleted(user_id)
        else:
            self._probe.user_not_found(user_id)
        return deleted


def _is_duplicate_email(error: IntegrityError) -> bool:
    """Tell whether an IntegrityError came from the email unique constraint."""
    if UNIQUE_EMAIL_CONSTRAINT in str(error):
        return True
    sqlstate = getattr(error.orig, "sqlstate", None) or getattr(
        error.orig, "pgcode", None
    )
    return sqlstate == _UNIQUE_VIOLATION


def _to_domain(row: Row[Any]) -> User:
    """Reconstitute a User from a users row."""
    data = row._mapping
    return User(
        id=data["id"],
        name=data["name"],
        email=data["email"],
        created_at=data["created_at"],
        updated_at=data["updated_at"],
    )
