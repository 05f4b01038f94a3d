"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict


class UserSignup(BaseModel):
    """User signup request.

    Fields are optional here so the ordered checks in the auth service decide
    which error the client sees first.
    """

    username: str | None = None
    email: str | None = None
    password: str | None = None


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    """Public user fields. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str


class AuthResponse(BaseModel):
    """Envelope returned by signup, login and session check."""

    success: bool = True
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str
