"""Authentication service for JWT and password handling."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenError(Exception):
    """Raised when a token cannot be verified."""


class MalformedToken(TokenError):
    """The token could not be parsed."""


class InvalidSignature(TokenError):
    """The token signature does not match the signing secret."""


class TokenExpired(TokenError):
    """The token is past its expiry time."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    Verification is pure computation: it checks the signature against the
    secret this instance was built with and the expiry against its clock.
    It says nothing about whether the subject still exists.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 10080,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = timedelta(minutes=expires_minutes)
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.jwt_expiration_minutes,
        )

    def issue(self, subject_id: str) -> str:
        """Create a signed token asserting subject_id."""
        issued_at = self._clock()
        to_encode = {
            "sub": str(subject_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_in).timestamp()),
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify a token and return its subject id.

        Raises MalformedToken, InvalidSignature or TokenExpired.
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedToken(str(e)) from e

        try:
            # Expiry is checked below against our own clock
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidSignature(str(e)) from e

        subject_id = payload.get("sub")
        expires_at = payload.get("exp")
        if not subject_id or not isinstance(expires_at, int | float):
            raise MalformedToken("Token is missing required claims")

        if self._clock().timestamp() >= expires_at:
            raise TokenExpired("Token has expired")

        return subject_id


@lru_cache
def get_token_service() -> TokenService:
    """Get the process-wide token service built from settings."""
    return TokenService.from_settings(get_settings())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user or not user.password_hash:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, email: str, password: str, name: str) -> User:
    """Create a new password-based user."""
    user = User(email=normalize_email(email), password_hash=get_password_hash(password), name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id}")
    return user
