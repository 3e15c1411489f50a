"""Database infrastructure - shared engine, session and schema primitives."""

from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    SchemaError,
)

__all__ = [
    "DatabaseConnectionError",
    "DatabaseError",
    "SchemaError",
]
