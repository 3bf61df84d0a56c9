"""
User Model.

Account identity used by the credential store.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cloudnotes.backend.models.base import Base, TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, Base):
    """Registered account. Created at signup, never updated or deleted by the API."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
