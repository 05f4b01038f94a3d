"""Session token issuing and verification.

Tokens are stateless HS256 JWTs. Verification is a pure function of the
secret, the token and the clock, so callers (and tests) can pass ``now``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from taskmanager.errors import InvalidToken

DEFAULT_LIFETIME = timedelta(hours=2)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""

    user_id: str
    username: str
    email: str
    issued_at: datetime
    expires_at: datetime


def issue_token(
    user_id: str,
    username: str,
    email: str,
    *,
    secret: str,
    algorithm: str = "HS256",
    lifetime: timedelta = DEFAULT_LIFETIME,
    now: datetime | None = None,
) -> str:
    """Create a signed session token expiring ``lifetime`` after ``now``."""
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + lifetime
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def verify_token(
    token: str,
    *,
    secret: str,
    algorithm: str = "HS256",
    now: datetime | None = None,
) -> TokenClaims:
    """Verify a session token and return its claims.

    Bad signatures, malformed payloads and expired tokens all raise
    ``InvalidToken`` with the same message.
    """
    try:
        # Expiry is checked below against the caller's clock
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"verify_exp": False, "verify_iat": False},
        )
    except JWTError as e:
        raise InvalidToken("Invalid token") from e

    user_id = payload.get("sub")
    username = payload.get("username")
    email = payload.get("email")
    exp = payload.get("exp")
    iat = payload.get("iat", exp)
    if not all(isinstance(v, str) and v for v in (user_id, username, email)):
        raise InvalidToken("Invalid token")
    if not isinstance(exp, int | float) or not isinstance(iat, int | float):
        raise InvalidToken("Invalid token")

    current = now or datetime.now(UTC)
    if exp <= current.timestamp():
        raise InvalidToken("Invalid token")

    return TokenClaims(
        user_id=user_id,
        username=username,
        email=email,
        issued_at=datetime.fromtimestamp(iat, UTC),
        expires_at=datetime.fromtimestamp(exp, UTC),
    )
