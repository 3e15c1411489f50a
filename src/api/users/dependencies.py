"""FastAPI dependency wiring for the users bounded context."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_session
from infrastructure.observability import ObservationContext
from users.application.observability import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from users.application.services import UserService
from users.infrastructure.observability import DefaultUserRepositoryProbe
from users.infrastructure.user_repository import UserRepository


def get_observation_context(request: Request) -> ObservationContext:
    """Describe the current request for the probes it creates."""
    return ObservationContext.from_request(request)


def get_user_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> UserServiceProbe:
    """Get UserServiceProbe instance.

    Returns:
        DefaultUserServiceProbe bound to the request context
    """
    return DefaultUserServiceProbe().with_context(context)


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> UserRepository:
    """Get UserRepository bound to the request session."""
    return UserRepository(
        session=session,
        probe=DefaultUserRepositoryProbe().with_context(context),
    )


def get_user_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    FastAPI caches ``get_session`` per request, so the repository and the
    service share one session.
    """
    return UserService(
        user_repository=user_repository,
        session=session,
        probe=probe,
    )
