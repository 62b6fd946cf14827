"""User model."""

from sqlalchemy import CheckConstraint, Column, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import IdentifierMixin, TimestampMixin


class User(Base, IdentifierMixin, TimestampMixin):
    """User model for authentication and ownership.

    Accounts created through GitHub have no password hash; password accounts
    have no github_id until linked. Never both missing.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "password_hash IS NOT NULL OR github_id IS NOT NULL",
            name="ck_users_has_credential",
        ),
    )

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False)
    github_id = Column(String(64), unique=True, nullable=True, index=True)

    # Relationships; deleting an account deletes everything it owns
    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")
    categories = relationship("Category", back_populates="owner", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="author", cascade="all, delete-orphan")
