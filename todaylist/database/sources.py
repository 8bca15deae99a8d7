"""Session-per-call adapters for the reset orchestrator's host ports.

The orchestrator is long-lived and its passes run in a worker thread, so it
cannot hold a request-scoped session. Each call opens a fresh session from
the factory and closes it before returning.
"""

from typing import Callable, Iterable, List

from sqlalchemy.orm import Session

from todaylist.database.repository import TaskRepository
from todaylist.database.settings_repository import SettingsRepository
from todaylist.models.task import Task


class SessionTaskSource:
    """TaskSource backed by TaskRepository."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def list_tasks(self) -> List[Task]:
        db = self.session_factory()
        try:
            return TaskRepository(db).get_all()
        finally:
            db.close()

    def delete_tasks(self, task_ids: Iterable[str]) -> int:
        db = self.session_factory()
        try:
            return TaskRepository(db).bulk_delete(task_ids)
        finally:
            db.close()


class SessionResetHourSource:
    """ResetHourSource backed by SettingsRepository."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_reset_hour(self) -> int:
        db = self.session_factory()
        try:
            return SettingsRepository(db).get_reset_hour()
        finally:
            db.close()
