"""User account API endpoints: signup, login, profile."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.errors import Conflict, Forbidden, Unauthenticated
from src.models.user import User
from src.schemas.auth import (
    AuthResponse,
    MessageResponse,
    ProfileResponse,
    UserLogin,
    UserResponse,
    UserSignup,
    UserUpdate,
    UserUpdateResponse,
)
from src.services.auth import (
    TokenService,
    authenticate_user,
    create_user,
    get_password_hash,
    get_token_service,
    get_user_by_email,
    normalize_email,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

EMAIL_TAKEN = "An account with this email address already exists"


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
):
    """Register a new user."""
    if get_user_by_email(db, user_data.email):
        raise Conflict(EMAIL_TAKEN)

    try:
        user = create_user(db, user_data.email, user_data.password, user_data.name)
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same email
        db.rollback()
        raise Conflict(EMAIL_TAKEN) from e

    return AuthResponse(
        message="User created successfully",
        token=token_service.issue(user.id),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        logger.info("Failed login attempt")
        raise Unauthenticated("The email or password you entered is incorrect")

    return AuthResponse(
        message="Login successful",
        token=token_service.issue(user.id),
        user=UserResponse.model_validate(user),
    )


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.put("/{user_id}", response_model=UserUpdateResponse)
def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the current user's name, email or password."""
    if user_id != current_user.id:
        raise Forbidden("You can only update your own profile")

    if user_data.email is not None:
        email = normalize_email(user_data.email)
        if email != current_user.email:
            if get_user_by_email(db, email):
                raise Conflict(EMAIL_TAKEN)
            current_user.email = email
    if user_data.name is not None:
        current_user.name = user_data.name
    if user_data.password is not None:
        current_user.password_hash = get_password_hash(user_data.password)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(EMAIL_TAKEN) from e
    db.refresh(current_user)

    return UserUpdateResponse(
        message="User updated successfully",
        user=UserResponse.model_validate(current_user),
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete the current user's account and everything it owns."""
    if user_id != current_user.id:
        raise Forbidden("You can only delete your own account")

    db.delete(current_user)
    db.commit()
    logger.info(f"Deleted user {user_id}")

    return MessageResponse(message="User account deleted successfully")
