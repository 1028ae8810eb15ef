"""
User ORM model.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.base
System role: Account persistence for signup/login
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from mini_perplexity.boundary.db.base import Base, TimestampMixin, UUIDMixin


class UserModel(Base, UUIDMixin, TimestampMixin):
    """Registered user; the password is stored only as a bcrypt hash."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    user_metadata: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)
