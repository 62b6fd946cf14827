"""GitHub OAuth API endpoints."""

import logging
import secrets
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db
from src.errors import AppError, Unauthenticated
from src.schemas.auth import GitHubAuthResponse, MessageResponse, ProfileResponse
from src.services.auth import TokenService, get_token_service
from src.services.github import (
    GitHubOAuthClient,
    OAuthError,
    get_github_client,
    get_or_create_github_user,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

STATE_COOKIE = "github_oauth_state"


@router.get("/github", status_code=302, response_class=RedirectResponse)
def github_login(
    github: Annotated[GitHubOAuthClient, Depends(get_github_client)],
):
    """Redirect to the GitHub login page."""
    state = secrets.token_urlsafe(32)
    response = RedirectResponse(github.authorization_url(state), status_code=302)
    response.set_cookie(
        STATE_COOKIE,
        state,
        max_age=600,
        httponly=True,
        samesite="lax",
        secure=get_settings().is_production,
    )
    return response


@router.get("/github/callback", response_model=GitHubAuthResponse)
def github_callback(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    github: Annotated[GitHubOAuthClient, Depends(get_github_client)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    expected_state: Annotated[str | None, Cookie(alias=STATE_COOKIE)] = None,
):
    """Finish the GitHub login and issue a token."""
    response.delete_cookie(STATE_COOKIE)
    try:
        return _finish_github_login(db, github, token_service, code, state, error, expected_state)
    except AppError as e:
        # Error responses expire the single-use state cookie as well
        e.clear_cookies = (STATE_COOKIE,)
        raise


def _finish_github_login(
    db: Session,
    github: GitHubOAuthClient,
    token_service: TokenService,
    code: str | None,
    state: str | None,
    error: str | None,
    expected_state: str | None,
) -> GitHubAuthResponse:
    if error or not code:
        logger.warning(f"GitHub login was not completed: {error or 'missing code'}")
        raise Unauthenticated("Could not authenticate with GitHub")
    if not state or not expected_state or not secrets.compare_digest(state, expected_state):
        logger.warning("GitHub login rejected: OAuth state mismatch")
        raise Unauthenticated("Could not authenticate with GitHub")

    try:
        profile = github.exchange_code(code)
    except OAuthError as e:
        logger.warning(f"GitHub code exchange failed: {e}")
        raise Unauthenticated("Could not authenticate with GitHub") from e

    user = get_or_create_github_user(db, profile)

    return GitHubAuthResponse(
        message="Authentication successful",
        token=token_service.issue(user.id),
        user=ProfileResponse.model_validate(user),
    )


@router.get("/github/failure", status_code=401, response_model=None)
def github_failure():
    """Report a failed GitHub login."""
    raise Unauthenticated("Could not authenticate with GitHub")


@router.get("/logout", response_model=MessageResponse)
def logout():
    """Logout. Tokens are not revoked server-side; the client discards it."""
    return MessageResponse(message="Logged out successfully")
