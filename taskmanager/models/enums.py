"""Enums for model fields."""

from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle state of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Severity rank used for sorting; higher is more urgent."""
        return PRIORITY_RANKS[self]


PRIORITY_RANKS = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
}


class TaskSort(str, Enum):
    """Sort orders accepted by the task list endpoint."""

    NEWEST = "newest"
    OLDEST = "oldest"
    DUE_DATE = "dueDate"
    PRIORITY = "priority"

    @classmethod
    def parse(cls, value: str | None) -> "TaskSort":
        """Parse a sort option, falling back to newest for unknown values."""
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST
