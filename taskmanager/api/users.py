"""User signup, login and session endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from taskmanager.api.dependencies import get_auth_context
from taskmanager.config import get_settings
from taskmanager.database import get_db
from taskmanager.models.user import User
from taskmanager.schemas.auth import (
    AuthResponse,
    MessageResponse,
    UserLogin,
    UserResponse,
    UserSignup,
)
from taskmanager.services.auth import (
    AuthContext,
    authenticate_user,
    create_session_token,
    signup_user,
)

router = APIRouter(prefix="/user", tags=["user"])

settings = get_settings()


def set_session_cookie(response: Response, user: User) -> None:
    """Issue a session token for the user and attach it as a cookie."""
    response.set_cookie(
        key=settings.cookie_name,
        value=create_session_token(user),
        max_age=settings.cookie_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and start a session."""
    user = signup_user(db, user_data.username, user_data.email, user_data.password)
    set_session_cookie(response, user)

    return AuthResponse(
        message="User signed up successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)
    set_session_cookie(response, user)

    return AuthResponse(
        message="User logged in successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def logout(response: Response):
    """Clear the session cookie.

    Tokens are stateless, so an already-issued token stays valid until it
    expires.
    """
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return MessageResponse(message="User logged out successfully")


@router.get("/check", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def check(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
):
    """Return the user behind the current session."""
    return AuthResponse(
        message="Valid user",
        user=UserResponse(id=auth.user_id, username=auth.username, email=auth.email),
    )
