"""Task schemas."""

from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from taskmanager.models.enums import TaskPriority, TaskStatus

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON names (``dueDate``, ``createdAt``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _clean_title(value: Any, empty_message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(empty_message)
    value = value.strip()
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    return value


def _clean_description(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("Description must be a string")
    value = value.strip()
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")
    return value


def _check_choice(value: Any, enum_cls: type, message: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or value not in {member.value for member in enum_cls}:
        raise ValueError(message)
    return value


def parse_due_date(value: Any) -> datetime | None:
    """Parse an ISO-8601 date or datetime and normalise it to UTC.

    Naive values are taken as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValueError("Due date must be a valid date") from None
    else:
        raise ValueError("Due date must be a valid date")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


class TaskCreate(CamelModel):
    """Create a new task."""

    title: str | None = Field(None, validate_default=True)
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value: Any) -> str:
        return _clean_title(value, "Title is required")

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, value: Any) -> str | None:
        return _clean_description(value)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> Any:
        return _check_choice(value, TaskStatus, "Invalid status")

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, value: Any) -> Any:
        return _check_choice(value, TaskPriority, "Invalid priority")

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, value: Any) -> datetime | None:
        return parse_due_date(value)


class TaskUpdate(CamelModel):
    """Partial task update. Only fields present in the request are written."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value: Any) -> str:
        return _clean_title(value, "Title cannot be empty")

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, value: Any) -> str | None:
        return _clean_description(value)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> Any:
        return _check_choice(value, TaskStatus, "Invalid status")

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, value: Any) -> Any:
        return _check_choice(value, TaskPriority, "Invalid priority")

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, value: Any) -> datetime | None:
        return parse_due_date(value)


class TaskResponse(CamelModel):
    """Task response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    owner_id: str
    title: str
    description: str | None
    status: str
    priority: str
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

    @field_serializer("due_date", "created_at", "updated_at")
    def serialize_timestamp(self, value: datetime | None) -> str | None:
        # SQLite hands back naive datetimes; everything is stored as UTC
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.isoformat()


class TaskEnvelope(BaseModel):
    """Single task response envelope."""

    success: bool = True
    message: str | None = None
    task: TaskResponse


class TaskListResponse(BaseModel):
    """Task list response envelope."""

    success: bool = True
    count: int
    tasks: list[TaskResponse]
    message: str | None = None
