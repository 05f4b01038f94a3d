"""FastAPI dependencies for authentication and database."""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from taskmanager.config import get_settings
from taskmanager.database import get_db
from taskmanager.errors import InvalidToken, Unauthenticated
from taskmanager.services.auth import AuthContext, get_user_by_id
from taskmanager.services.tasks import TaskService
from taskmanager.services.tokens import verify_token

logger = logging.getLogger(__name__)

settings = get_settings()

session_cookie = APIKeyCookie(name=settings.cookie_name, auto_error=False)


def get_auth_context(
    token: Annotated[str | None, Depends(session_cookie)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthContext:
    """Resolve the session cookie to the authenticated user.

    One verification per request; any failure is a 401.
    """
    if not token:
        raise Unauthenticated("Token is not present")

    try:
        claims = verify_token(
            token, secret=settings.jwt_secret, algorithm=settings.jwt_algorithm
        )
    except InvalidToken:
        raise Unauthenticated("Invalid token") from None

    user = get_user_by_id(db, claims.user_id)
    if user is None:
        logger.info(f"Session token for unknown user {claims.user_id}")
        raise Unauthenticated("User does not exist")

    return AuthContext.from_user(user)


def get_task_service(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get a task service scoped to the authenticated user."""
    return TaskService(db, auth.user_id)
