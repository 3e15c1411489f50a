"""Application layer for the users bounded context."""

from users.application.services import UserService

__all__ = ["UserService"]
