"""Ports for the users bounded context."""

from users.ports.exceptions import (
    DuplicateEmailError,
    InvalidUserError,
    UserNotFoundError,
    UserStoreUnavailableError,
)
from users.ports.repositories import IUserRepository

__all__ = [
    "DuplicateEmailError",
    "IUserRepository",
    "InvalidUserError",
    "UserNotFoundError",
    "UserStoreUnavailableError",
]
