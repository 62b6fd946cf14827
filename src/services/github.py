"""GitHub OAuth integration: code exchange and local account lookup."""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.errors import Conflict
from src.models.user import User
from src.services.auth import normalize_email

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
TOKEN_URL = "https://github.com/login/oauth/access_token"
API_BASE_URL = "https://api.github.com"


class OAuthError(Exception):
    """Raised when the GitHub exchange fails for any reason."""


@dataclass(frozen=True)
class GitHubProfile:
    """The subset of a GitHub user profile we keep."""

    id: str
    login: str
    name: str | None = None
    email: str | None = None


class GitHubOAuthClient:
    """Client for the GitHub OAuth web flow."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        callback_url: str,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.callback_url = callback_url
        self.timeout = 30.0
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitHubOAuthClient":
        return cls(
            client_id=settings.github_client_id or "",
            client_secret=settings.github_client_secret or "",
            callback_url=settings.github_callback_url,
        )

    def authorization_url(self, state: str) -> str:
        """Build the URL that starts the GitHub login."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "scope": "user:email",
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def exchange_code(self, code: str) -> GitHubProfile:
        """Exchange an authorization code for the user's GitHub profile."""
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                token_response = client.post(
                    TOKEN_URL,
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "code": code,
                        "redirect_uri": self.callback_url,
                    },
                    headers={"Accept": "application/json"},
                )
                token_response.raise_for_status()
                access_token = token_response.json().get("access_token")
                if not access_token:
                    raise OAuthError("GitHub did not return an access token")

                headers = {
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                }
                user_response = client.get(f"{API_BASE_URL}/user", headers=headers)
                user_response.raise_for_status()
                userinfo = user_response.json()
                if not isinstance(userinfo, dict) or userinfo.get("id") is None:
                    raise OAuthError("GitHub returned an invalid user profile")

                email = userinfo.get("email")
                if not email:
                    email = self._primary_email(client, headers)
        except httpx.HTTPError as e:
            logger.warning(f"HTTP error during GitHub OAuth exchange: {e}")
            raise OAuthError(str(e)) from e
        except ValueError as e:
            logger.warning(f"Failed to parse GitHub response as JSON: {e}")
            raise OAuthError(str(e)) from e

        return GitHubProfile(
            id=str(userinfo["id"]),
            login=userinfo.get("login") or str(userinfo["id"]),
            name=userinfo.get("name"),
            email=email,
        )

    def _primary_email(self, client: httpx.Client, headers: dict[str, str]) -> str | None:
        """Get the primary verified email when the profile hides it."""
        response = client.get(f"{API_BASE_URL}/user/emails", headers=headers)
        if response.status_code != 200:
            return None
        entries = response.json()
        if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
            raise OAuthError("GitHub returned an invalid email list")
        for entry in entries:
            if entry.get("primary") and entry.get("verified"):
                return entry.get("email")
        return None


def get_github_client() -> GitHubOAuthClient:
    """Dependency that provides the GitHub OAuth client."""
    return GitHubOAuthClient.from_settings(get_settings())


def get_or_create_github_user(db: Session, profile: GitHubProfile) -> User:
    """Find the local account for a GitHub profile, creating it on first login."""
    user = db.query(User).filter(User.github_id == profile.id).first()
    if user:
        return user

    email = normalize_email(profile.email or f"{profile.login}@github.com")
    if db.query(User).filter(User.email == email).first():
        raise Conflict("An account with this email address already exists")

    user = User(email=email, name=profile.name or profile.login, github_id=profile.id)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("An account with this email address already exists") from e
    db.refresh(user)
    logger.info(f"Created user {user.id} from GitHub login {profile.login}")
    return user
