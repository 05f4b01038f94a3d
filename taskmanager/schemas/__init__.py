"""Pydantic schemas for API requests and responses."""

from taskmanager.schemas.auth import (
    AuthResponse,
    MessageResponse,
    UserLogin,
    UserResponse,
    UserSignup,
)
from taskmanager.schemas.task import (
    TaskCreate,
    TaskEnvelope,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)

__all__ = [
    "UserSignup",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "MessageResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskEnvelope",
    "TaskListResponse",
]
