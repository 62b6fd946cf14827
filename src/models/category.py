"""Category model."""

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import IdentifierMixin, TimestampMixin


class Category(Base, IdentifierMixin, TimestampMixin):
    """Category model for grouping a user's tasks."""

    __tablename__ = "categories"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_categories_user_name"),)

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="categories")
