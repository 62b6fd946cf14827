"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.errors import ValidationFailed
from src.models.enums import TaskPriority, TaskStatus
from src.models.task import Task
from src.models.user import User
from src.schemas.auth import MessageResponse
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from src.services.ownership import delete_owned_task, get_owned_task

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

SORTABLE_FIELDS = {
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
    "due_date": Task.due_date,
    "title": Task.title,
    "priority": Task.priority,
    "status": Task.status,
}


def parse_sort(sort_by: str):
    """Turn 'field' or 'field:desc' into an ORDER BY clause."""
    field, _, direction = sort_by.partition(":")
    column = SORTABLE_FIELDS.get(field)
    if column is None or direction not in ("", "asc", "desc"):
        raise ValidationFailed(
            [
                {
                    "field": "sort_by",
                    "message": f"Sort must be one of {sorted(SORTABLE_FIELDS)} "
                    "optionally followed by ':asc' or ':desc'",
                    "type": "value_error",
                }
            ]
        )
    return column.desc() if direction == "desc" else column.asc()


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new task."""
    task = Task(
        user_id=current_user.id,
        title=task_data.title,
        description=task_data.description,
        status=task_data.status.value,
        priority=task_data.priority.value,
        due_date=task_data.due_date,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


@router.get("", response_model=list[TaskResponse])
def get_tasks(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    task_status: Annotated[TaskStatus | None, Query(alias="status")] = None,
    priority: TaskPriority | None = None,
    sort_by: str | None = None,
):
    """Get the current user's tasks, optionally filtered and sorted."""
    query = db.query(Task).filter(Task.user_id == current_user.id)

    if task_status is not None:
        query = query.filter(Task.status == task_status.value)
    if priority is not None:
        query = query.filter(Task.priority == priority.value)
    if sort_by:
        query = query.order_by(parse_sort(sort_by))
    else:
        query = query.order_by(Task.created_at)

    return query.all()


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single task."""
    return get_owned_task(db, task_id, current_user)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a task."""
    task = get_owned_task(db, task_id, current_user)

    if task_data.title is not None:
        task.title = task_data.title
    if "description" in task_data.model_fields_set:
        task.description = task_data.description
    if task_data.status is not None:
        task.status = task_data.status.value
    if task_data.priority is not None:
        task.priority = task_data.priority.value
    if "due_date" in task_data.model_fields_set:
        task.due_date = task_data.due_date

    db.commit()
    db.refresh(task)
    return task


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a task and its comments."""
    delete_owned_task(db, task_id, current_user)
    return MessageResponse(message="Task deleted successfully")
