"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.errors import Conflict
from src.models.category import Category
from src.models.user import User
from src.schemas.auth import MessageResponse
from src.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from src.services.ownership import delete_owned_category, get_owned_category

router = APIRouter(prefix="/api/categories", tags=["categories"])

CATEGORY_EXISTS = "A category with this name already exists for your account"


def commit_category(db: Session) -> None:
    """Commit, reporting a duplicate (user, name) pair as a conflict."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(CATEGORY_EXISTS) from e


@router.get("", response_model=list[CategoryResponse])
def get_categories(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all categories for the current user."""
    return (
        db.query(Category)
        .filter(Category.user_id == current_user.id)
        .order_by(Category.name)
        .all()
    )


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new category."""
    category = Category(
        user_id=current_user.id,
        name=category_data.name,
        description=category_data.description,
    )
    db.add(category)
    commit_category(db)
    db.refresh(category)
    return category


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single category."""
    return get_owned_category(db, category_id, current_user)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a category."""
    category = get_owned_category(db, category_id, current_user)

    if category_data.name is not None:
        category.name = category_data.name
    if "description" in category_data.model_fields_set:
        category.description = category_data.description

    commit_category(db)
    db.refresh(category)
    return category


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a category."""
    delete_owned_category(db, category_id, current_user)
    return MessageResponse(message="Category deleted successfully")
