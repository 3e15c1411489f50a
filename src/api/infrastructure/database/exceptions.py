"""Errors raised while bringing the database up at startup.

Request-time failures are translated by the application services instead;
these only abort the lifespan.
"""


class DatabaseError(Exception):
    """A startup database step failed."""


class DatabaseConnectionError(DatabaseError):
    """``SELECT 1`` could not be run on a pooled connection."""


class SchemaError(DatabaseError):
    """``CREATE TABLE IF NOT EXISTS`` for the mapped tables failed."""
