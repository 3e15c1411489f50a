"""Pydantic models for the users API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from users.domain import User, UserPatch


def _reject_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


class CreateUserRequest(BaseModel):
    """Request model for creating a user."""

    name: str = Field(..., description="Display name", min_length=1, max_length=255)
    email: str = Field(
        ..., description="Email address (unique)", min_length=1, max_length=255
    )

    @field_validator("name", "email")
    @classmethod
    def reject_blank(cls, value: str | None) -> str | None:
        """Reject whitespace-only values."""
        return _reject_blank(value)


class UpdateUserRequest(BaseModel):
    """Request model for updating a user.

    Omitted or null fields keep their current value. A supplied field must
    not be empty.
    """

    name: str | None = Field(
        None, description="New display name", min_length=1, max_length=255
    )
    email: str | None = Field(
        None, description="New email address", min_length=1, max_length=255
    )

    @field_validator("name", "email")
    @classmethod
    def reject_blank(cls, value: str | None) -> str | None:
        """Reject whitespace-only values."""
        return _reject_blank(value)

    def to_patch(self) -> UserPatch:
        """Convert the request into a domain patch."""
        return UserPatch(name=self.name, email=self.email)


class UserResponse(BaseModel):
    """Response model for a user."""

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    created_at: datetime = Field(..., description="Creation timestamp (ISO-8601)")
    updated_at: datetime = Field(..., description="Last update timestamp (ISO-8601)")

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert a domain User to an API response.

        Args:
            user: User domain value

        Returns:
            UserResponse
        """
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class HealthResponse(BaseModel):
    """Response model for the liveness check."""

    status: str = Field("ok", description="Always 'ok' while the process serves")


class DatabaseHealthResponse(BaseModel):
    """Response model for the database health check."""

    status: str = Field(..., description="'ok' or 'unavailable'")
    connected: bool = Field(..., description="Whether SELECT 1 succeeded")


class ErrorResponse(BaseModel):
    """Body returned with every non-2xx response."""

    detail: str = Field(..., description="Human-readable error message")
