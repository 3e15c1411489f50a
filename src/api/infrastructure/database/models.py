"""Declarative base and timestamp columns shared by the mapped tables.

The metadata on ``Base`` drives both startup schema creation and alembic
autogenerate.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base; every mapped table registers on Base.metadata."""


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamp columns.

    Both columns take PostgreSQL now(), the transaction start time, so a
    freshly inserted row has created_at equal to updated_at. Every UPDATE
    issued through SQLAlchemy refreshes updated_at.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=func.now(),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=func.now(),
        onupdate=func.now(),
        server_default=func.now(),
        nullable=False,
    )
