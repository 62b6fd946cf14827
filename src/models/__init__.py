"""SQLAlchemy models."""

from src.models.category import Category
from src.models.comment import Comment
from src.models.task import Task
from src.models.user import User

__all__ = [
    "User",
    "Task",
    "Category",
    "Comment",
]
