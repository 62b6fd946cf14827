"""Task model."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import TaskPriority, TaskStatus
from src.models.mixins import IdentifierMixin, TimestampMixin


class Task(Base, IdentifierMixin, TimestampMixin):
    """A unit of work owned by a single user."""

    __tablename__ = "tasks"

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    due_date = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="tasks")
    comments = relationship(
        "Comment", back_populates="task", cascade="all, delete-orphan", passive_deletes=True
    )
