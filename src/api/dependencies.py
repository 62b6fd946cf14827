"""FastAPI dependencies for authentication and database."""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import Unauthenticated
from src.models.user import User
from src.services.auth import TokenError, TokenService, get_token_service, get_user_by_id

logger = logging.getLogger(__name__)

# auto_error is off so a missing header is reported with our own error body
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> User:
    """Get the current authenticated user from the bearer token.

    The caller learns only that the token was rejected, never which
    verification step failed.
    """
    if credentials is None:
        raise Unauthenticated("No token provided")

    try:
        user_id = token_service.verify(credentials.credentials)
    except TokenError as e:
        logger.debug(f"Rejected token: {type(e).__name__}: {e}")
        raise Unauthenticated("Token is invalid or expired") from e

    user = get_user_by_id(db, user_id)
    if user is None:
        logger.debug(f"Rejected token for missing user {user_id}")
        raise Unauthenticated("The user associated with this token no longer exists")

    return user
