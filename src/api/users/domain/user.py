"""User record and the partial-update value applied to it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    """One row of the users table.

    Instances are read-only snapshots of what the database returned; the
    database remains the only source of truth.
    """

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.id}, {self.email})"


@dataclass(frozen=True)
class UserPatch:
    """Fields to replace on an existing user.

    ``None`` means the field was omitted and keeps its current value. Any
    string, including an empty one, means the caller supplied it; the
    application service rejects supplied-but-blank values.
    """

    name: str | None = None
    email: str | None = None

    def is_empty(self) -> bool:
        """Return True when no field was supplied."""
        return self.name is None and self.email is None

    def as_values(self) -> dict[str, str]:
        """Return only the supplied fields, keyed by column name."""
        values: dict[str, str] = {}
        if self.name is not None:
            values["name"] = self.name
        if self.email is not None:
            values["email"] = self.email
        return values
