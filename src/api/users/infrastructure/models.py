"""SQLAlchemy ORM model for the users table.

The repository issues Core statements against ``UserModel.__table__``;
the declarative class exists to define the table, its defaults and its
constraints in one place.
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin

UNIQUE_EMAIL_CONSTRAINT = "uq_users_email"


class UserModel(Base, TimestampMixin):
    """ORM model for users table.

    Notes:
    - id is generated by the database (SERIAL) and never reused
    - email uniqueness is enforced only by the uq_users_email constraint
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("email", name=UNIQUE_EMAIL_CONSTRAINT),)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, email={self.email})>"
