"""User model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from taskmanager.database import Base
from taskmanager.models.mixins import IdMixin, TimestampMixin


class User(Base, IdMixin, TimestampMixin):
    """User model for authentication and task ownership."""

    __tablename__ = "users"

    username = Column(String(20), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    tasks = relationship("Task", back_populates="owner", passive_deletes=True)
