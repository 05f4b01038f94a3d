"""Tests for session token issuing and verification."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from taskmanager.errors import InvalidToken
from taskmanager.services.tokens import issue_token, verify_token

SECRET = "unit-test-secret"
NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def make_token(**kwargs):
    return issue_token("abc123", "alice", "alice@example.com", secret=SECRET, now=NOW, **kwargs)


class TestVerifyToken:
    """Tests for verify_token."""

    def test_round_trip_claims(self):
        claims = verify_token(make_token(), secret=SECRET, now=NOW)

        assert claims.user_id == "abc123"
        assert claims.username == "alice"
        assert claims.email == "alice@example.com"
        assert claims.issued_at == NOW

    def test_default_lifetime_is_two_hours(self):
        claims = verify_token(make_token(), secret=SECRET, now=NOW)
        assert claims.expires_at - claims.issued_at == timedelta(hours=2)

    def test_valid_just_before_expiry(self):
        token = make_token()
        verify_token(token, secret=SECRET, now=NOW + timedelta(hours=2) - timedelta(seconds=1))

    def test_expired_at_expiry(self):
        with pytest.raises(InvalidToken):
            verify_token(make_token(), secret=SECRET, now=NOW + timedelta(hours=2))

    def test_custom_lifetime(self):
        token = make_token(lifetime=timedelta(minutes=5))
        with pytest.raises(InvalidToken):
            verify_token(token, secret=SECRET, now=NOW + timedelta(minutes=6))

    def test_wrong_secret(self):
        with pytest.raises(InvalidToken):
            verify_token(make_token(), secret="another-secret", now=NOW)

    def test_tampered_token(self):
        header, payload, signature = make_token().split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(InvalidToken):
            verify_token(tampered, secret=SECRET, now=NOW)

    def test_garbage(self):
        with pytest.raises(InvalidToken):
            verify_token("definitely-not-a-token", secret=SECRET, now=NOW)

    def test_missing_claims(self):
        token = jwt.encode(
            {"sub": "abc123", "exp": int((NOW + timedelta(hours=1)).timestamp())},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            verify_token(token, secret=SECRET, now=NOW)

    def test_missing_expiry(self):
        token = jwt.encode(
            {"sub": "abc123", "username": "alice", "email": "alice@example.com"},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            verify_token(token, secret=SECRET, now=NOW)

    def test_expired_and_malformed_fail_alike(self):
        """Callers cannot tell an expired token from a broken one."""
        with pytest.raises(InvalidToken) as expired:
            verify_token(make_token(), secret=SECRET, now=NOW + timedelta(days=1))
        with pytest.raises(InvalidToken) as malformed:
            verify_token("garbage", secret=SECRET, now=NOW)

        assert str(expired.value) == str(malformed.value)
