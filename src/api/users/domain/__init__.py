"""Domain layer for the users bounded context."""

from users.domain.user import User, UserPatch

__all__ = [
    "User",
    "UserPatch",
]
