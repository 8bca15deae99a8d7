"""Data models for todaylist."""

from todaylist.models.task import Task
from todaylist.models.settings import Settings

__all__ = [
    "Task",
    "Settings",
]
