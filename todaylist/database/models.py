"""SQLAlchemy database models for todaylist."""

from datetime import datetime, timezone
from typing import Optional
import uuid
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, Index

from todaylist.database.database import Base
from todaylist.models.constants import DEFAULT_RESET_HOUR


def to_db_timestamp(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC for storage.

    Naive inputs are assumed to already be UTC.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_db_timestamp(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a stored naive timestamp."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_group_order", "is_completed", "order_key"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    content = Column(String, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    # "order" is a reserved word in SQL
    order_key = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False, default=_utcnow, index=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from todaylist.models.task import Task

        return Task(
            id=self.id,
            content=self.content,
            is_completed=bool(self.is_completed),
            order=float(self.order_key),
            created_at=from_db_timestamp(self.created_at),
        )

    @classmethod
    def from_pydantic(cls, task):
        """Create database model from Pydantic model."""
        return cls(
            id=task.id,
            content=task.content,
            is_completed=task.is_completed,
            order_key=task.order,
            created_at=to_db_timestamp(task.created_at),
        )


class SettingsDB(Base):
    """Database model for Settings (expected to hold a single row)."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    reset_hour = Column(Integer, nullable=False, default=DEFAULT_RESET_HOUR)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from todaylist.models.settings import Settings

        return Settings(reset_hour=self.reset_hour)
