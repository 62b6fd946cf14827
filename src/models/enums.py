"""Enums for model fields."""

from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle states of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
