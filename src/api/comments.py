"""Comment API endpoints.

Comments hang off tasks. Creating or listing comments requires owning the
task; reading, editing or deleting a single comment requires having written
it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from src.api.dependencies import get_current_user
from src.database import get_db
from src.models.comment import Comment
from src.models.user import User
from src.schemas.auth import MessageResponse
from src.schemas.comment import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    CommentWithAuthorResponse,
)
from src.services.ownership import get_authored_comment, get_owned_task

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    comment_data: CommentCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Comment on one of the current user's tasks."""
    task = get_owned_task(db, comment_data.task_id, current_user)

    comment = Comment(task_id=task.id, user_id=current_user.id, content=comment_data.content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


@router.get("/task/{task_id}", response_model=list[CommentWithAuthorResponse])
def get_task_comments(
    task_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a task's comments, newest first."""
    task = get_owned_task(db, task_id, current_user)

    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.task_id == task.id)
        .order_by(Comment.created_at.desc())
        .all()
    )


@router.get("/{comment_id}", response_model=CommentWithAuthorResponse)
def get_comment(
    comment_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single comment."""
    return get_authored_comment(db, comment_id, current_user, action="view")


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: str,
    comment_data: CommentUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a comment's content."""
    comment = get_authored_comment(db, comment_id, current_user, action="update")

    comment.content = comment_data.content

    db.commit()
    db.refresh(comment)
    return comment


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a comment."""
    comment = get_authored_comment(db, comment_id, current_user, action="delete")

    db.delete(comment)
    db.commit()
    return MessageResponse(message="Comment deleted successfully")
