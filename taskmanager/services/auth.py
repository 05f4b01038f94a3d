"""Authentication service for session tokens and password handling."""

import logging
import re
from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskmanager.config import get_settings
from taskmanager.errors import DuplicateUser, InvalidCredentials, ValidationError
from taskmanager.models.user import User
from taskmanager.services.tokens import issue_token

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_ ]+$")
PASSWORD_MIN_LENGTH = 6
STRONG_PASSWORD_MIN_LENGTH = 8


@dataclass(frozen=True)
class AuthContext:
    """Identity of the user behind the current request."""

    user_id: str
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "AuthContext":
        return cls(user_id=user.id, username=user.username, email=user.email)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return pwd_context.hash(password)


def is_strong_password(password: str) -> bool:
    """Check length and character-class diversity.

    Requires at least 8 characters with a lowercase letter, an uppercase
    letter, a digit and a symbol.
    """
    return (
        len(password) >= STRONG_PASSWORD_MIN_LENGTH
        and any(c.islower() for c in password)
        and any(c.isupper() for c in password)
        and any(c.isdigit() for c in password)
        and any(not c.isalnum() for c in password)
    )


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_signup(username: str | None, email: str | None, password: str | None) -> None:
    """Validate signup input. The first failing check wins."""
    if not username or not username.strip() or not email or not email.strip() or not password:
        raise ValidationError("All fields are required")
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Invalid email format") from None
    if not is_strong_password(password):
        raise ValidationError("Weak password")
    username = username.strip()
    if len(username) < USERNAME_MIN_LENGTH:
        raise ValidationError(f"Username must be at least {USERNAME_MIN_LENGTH} characters")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
    if not USERNAME_PATTERN.match(username):
        raise ValidationError("Username may only contain letters, numbers, underscores and spaces")


def create_session_token(user: User) -> str:
    """Issue a session token for a user using the configured secret."""
    return issue_token(
        user.id,
        user.username,
        user.email,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        lifetime=settings.token_lifetime,
    )


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, username: str, email: str, password: str) -> User:
    """Create a new user.

    Raises ``DuplicateUser`` if the email is already taken.
    """
    hashed_password = get_password_hash(password)
    user = User(
        username=username.strip(),
        email=normalize_email(email),
        password_hash=hashed_password,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent signup took the email between the check and the insert
        db.rollback()
        raise DuplicateUser("User already exists") from None
    db.refresh(user)
    return user


def signup_user(db: Session, username: str | None, email: str | None, password: str | None) -> User:
    """Validate signup input, enforce email uniqueness and create the user."""
    validate_signup(username, email, password)
    if get_user_by_email(db, email):
        raise DuplicateUser("User already exists")
    user = create_user(db, username, email, password)
    logger.info(f"User signed up: {user.id}")
    return user


def authenticate_user(db: Session, email: str | None, password: str | None) -> User:
    """Authenticate a user by email and password.

    Every failure raises the same ``InvalidCredentials`` error so the response
    does not reveal whether the email exists.
    """
    if not email or not password:
        raise InvalidCredentials("Invalid email or password")
    user = get_user_by_email(db, email)
    if not user:
        # Keep timing close to the wrong-password path
        pwd_context.dummy_verify()
        raise InvalidCredentials("Invalid email or password")
    if not verify_password(password, user.password_hash):
        logger.info(f"Failed login for user {user.id}")
        raise InvalidCredentials("Invalid email or password")
    return user
