"""Domain exceptions for the users bounded context.

These exceptions represent domain-level errors raised by the repository
and the application service. The presentation layer maps each one to an
HTTP status code.
"""


class InvalidUserError(Exception):
    """Raised when a required user field is missing or blank."""

    pass


class UserNotFoundError(Exception):
    """Raised when no user exists with the requested ID."""

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class DuplicateEmailError(Exception):
    """Raised when an insert or update violates email uniqueness.

    The unique constraint on users.email is the only source of this error;
    the application never checks for an existing email beforehand.
    """

    def __init__(self, email: str):
        super().__init__(f"A user with email '{email}' already exists")
        self.email = email


class UserStoreUnavailableError(Exception):
    """Raised when the database cannot serve a request.

    Covers unreachable databases, dropped connections and pool acquisition
    timeouts. The message is safe to log; it is never sent to clients.
    """

    pass
