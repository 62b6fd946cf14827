"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthResponse,
    MessageResponse,
    ProfileResponse,
    UserLogin,
    UserResponse,
    UserSignup,
    UserUpdate,
)
from src.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from src.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate

__all__ = [
    "UserSignup",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "ProfileResponse",
    "AuthResponse",
    "MessageResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
]
