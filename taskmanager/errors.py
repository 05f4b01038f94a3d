"""Application error taxonomy.

Every error raised from a request handler is turned into the JSON envelope
``{"success": false, "message": ...}`` by the exception handlers registered in
``taskmanager.main``.
"""

from fastapi import status


class TaskManagerError(Exception):
    """Base class for errors that map to a JSON error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskManagerError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class Unauthenticated(TaskManagerError):
    """Missing, invalid or expired session token, or the user is gone."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class DuplicateUser(TaskManagerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class InvalidCredentials(TaskManagerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class NotFound(TaskManagerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ServerError(TaskManagerError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


class InvalidToken(Exception):
    """Session token failed signature, payload or expiry checks."""
