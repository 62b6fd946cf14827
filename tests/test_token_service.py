"""Tests for token issuance and verification."""

from datetime import UTC, datetime, timedelta

import pytest

from src.services.auth import (
    InvalidSignature,
    MalformedToken,
    TokenError,
    TokenExpired,
    TokenService,
)

SECRET = "test-secret-key-123456789"


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def service(clock):
    return TokenService(SECRET, expires_minutes=60, clock=clock)


def test_issue_then_verify_returns_subject(service):
    token = service.issue("user-123")
    assert service.verify(token) == "user-123"


def test_token_valid_until_expiry(service, clock):
    token = service.issue("user-123")
    clock.advance(minutes=59, seconds=59)
    assert service.verify(token) == "user-123"


def test_expired_token_rejected(service, clock):
    token = service.issue("user-123")
    clock.advance(minutes=60)
    with pytest.raises(TokenExpired):
        service.verify(token)


def test_signature_checked_before_expiry(service, clock):
    """An expired token with a bad signature reports the signature."""
    other = TokenService("another-secret", expires_minutes=60, clock=clock)
    token = other.issue("user-123")
    clock.advance(days=1)
    with pytest.raises(InvalidSignature):
        service.verify(token)


def test_wrong_secret_rejected(service, clock):
    forged = TokenService("not-the-secret", expires_minutes=60, clock=clock).issue("user-123")
    with pytest.raises(InvalidSignature):
        service.verify(forged)


def test_tampered_payload_rejected(service):
    header, payload, signature = service.issue("user-123").split(".")
    other_payload = service.issue("user-456").split(".")[1]
    with pytest.raises(InvalidSignature):
        service.verify(f"{header}.{other_payload}.{signature}")


@pytest.mark.parametrize("token", ["", "garbage", "a.b", "not.a.token"])
def test_malformed_token_rejected(service, token):
    with pytest.raises(MalformedToken):
        service.verify(token)


def test_all_failures_share_base_class():
    assert issubclass(MalformedToken, TokenError)
    assert issubclass(InvalidSignature, TokenError)
    assert issubclass(TokenExpired, TokenError)


def test_rotating_secret_invalidates_old_tokens(service, clock):
    token = service.issue("user-123")
    rotated = TokenService("rotated-secret", expires_minutes=60, clock=clock)
    with pytest.raises(InvalidSignature):
        rotated.verify(token)
