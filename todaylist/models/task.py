"""Task data model for todaylist."""

from datetime import datetime
from pydantic import BaseModel, Field


class Task(BaseModel):
    """A single entry on today's list."""

    id: str = Field(..., description="Unique task identifier (UUID v4)")
    content: str = Field(..., description="Single-line task text")
    is_completed: bool = Field(False, description="Whether the task has been marked done")
    order: float = Field(..., description="Position key, comparable only within the same completion group")
    created_at: datetime = Field(..., description="Task creation timestamp")
