"""Task model."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from taskmanager.database import Base
from taskmanager.models.enums import TaskPriority, TaskStatus
from taskmanager.models.mixins import IdMixin, TimestampMixin


class Task(Base, IdMixin, TimestampMixin):
    """A personal task owned by exactly one user."""

    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_owner_status", "owner_id", "status"),)

    owner_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    # Plain strings, not a DB enum: filtering on an unknown value matches nothing
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    due_date = Column(DateTime(timezone=True), nullable=True)

    owner = relationship("User", back_populates="tasks")
