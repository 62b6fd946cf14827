"""Comment schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.auth import NonBlankStr

CommentContent = Annotated[NonBlankStr, Field(max_length=5000)]


class CommentCreate(BaseModel):
    """Create a comment on a task."""

    content: CommentContent
    task_id: NonBlankStr


class CommentUpdate(BaseModel):
    """Update a comment. Only the content can change."""

    content: CommentContent


class CommentAuthor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class CommentResponse(BaseModel):
    """Comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    user_id: str
    content: str
    created_at: datetime
    updated_at: datetime


class CommentWithAuthorResponse(CommentResponse):
    """Comment response with the author's public details."""

    author: CommentAuthor
