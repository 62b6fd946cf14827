"""Task schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import TaskPriority, TaskStatus
from src.schemas.auth import NonBlankStr


class TaskCreate(BaseModel):
    """Create a new task."""

    title: Annotated[NonBlankStr, Field(max_length=255)]
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None


class TaskUpdate(BaseModel):
    """Update a task."""

    title: Annotated[NonBlankStr, Field(max_length=255)] | None = None
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime
