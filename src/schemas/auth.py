"""Authentication and account schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints

# A string that is trimmed and must not be empty afterwards
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class UserSignup(BaseModel):
    """User signup request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    name: Annotated[NonBlankStr, Field(max_length=255)]


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class UserUpdate(BaseModel):
    """Profile update request. Only these fields may be changed."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[NonBlankStr, Field(max_length=255)] | None = None
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6, max_length=128)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str


class ProfileResponse(UserResponse):
    """User information including the linked GitHub account."""

    github_id: str | None = None


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    message: str
    token: str
    user: UserResponse


class GitHubAuthResponse(AuthResponse):
    user: ProfileResponse


class UserUpdateResponse(BaseModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
