"""Ownership guards for user-owned resources.

Task and category lookups filter on the resource id and the owner id in the
same query, so a resource that belongs to someone else is reported exactly
like one that does not exist. Comments are the exception: a comment that
exists but was written by another user is reported as forbidden.
"""

from sqlalchemy.orm import Session

from src.errors import Forbidden, NotFound
from src.models.category import Category
from src.models.comment import Comment
from src.models.task import Task
from src.models.user import User

TASK_NOT_FOUND = "The requested task does not exist or you do not have permission to access it"
CATEGORY_NOT_FOUND = "The specified category does not exist or you do not have access to it"


def get_owned_task(db: Session, task_id: str, user: User) -> Task:
    """Get a task owned by the user, or raise NotFound."""
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == user.id).first()
    if task is None:
        raise NotFound(TASK_NOT_FOUND)
    return task


def delete_owned_task(db: Session, task_id: str, user: User) -> None:
    """Delete a task owned by the user; its comments go with it (ON DELETE CASCADE)."""
    deleted = (
        db.query(Task)
        .filter(Task.id == task_id, Task.user_id == user.id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFound(TASK_NOT_FOUND)
    db.commit()


def get_owned_category(db: Session, category_id: str, user: User) -> Category:
    """Get a category owned by the user, or raise NotFound."""
    category = (
        db.query(Category)
        .filter(Category.id == category_id, Category.user_id == user.id)
        .first()
    )
    if category is None:
        raise NotFound(CATEGORY_NOT_FOUND)
    return category


def delete_owned_category(db: Session, category_id: str, user: User) -> None:
    """Delete a category in one statement scoped to its owner."""
    deleted = (
        db.query(Category)
        .filter(Category.id == category_id, Category.user_id == user.id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFound(CATEGORY_NOT_FOUND)
    db.commit()


def get_authored_comment(
    db: Session, comment_id: str, user: User, action: str = "access"
) -> Comment:
    """Get a comment written by the user.

    Raises NotFound when the comment does not exist and Forbidden when it
    was written by someone else.
    """
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if comment is None:
        raise NotFound("The specified comment does not exist")
    if comment.user_id != user.id:
        raise Forbidden(f"You can only {action} your own comments")
    return comment
