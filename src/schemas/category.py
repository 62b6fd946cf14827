"""Category schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.auth import NonBlankStr


class CategoryCreate(BaseModel):
    """Create a new category."""

    name: Annotated[NonBlankStr, Field(max_length=255)]
    description: str | None = Field(None, max_length=2000)


class CategoryUpdate(BaseModel):
    """Update a category."""

    name: Annotated[NonBlankStr, Field(max_length=255)] | None = None
    description: str | None = Field(None, max_length=2000)


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime
