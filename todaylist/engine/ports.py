"""Interfaces the reset engine needs from its host.

The orchestrator depends only on these protocols; the SQLAlchemy adapter in
``todaylist.database`` is one implementation, the in-memory fakes in the test
suite are another.
"""

from datetime import datetime
from typing import Iterable, List, Protocol

from todaylist.models.task import Task


class TaskSource(Protocol):
    """Snapshot read and batch delete over the task collection."""

    def list_tasks(self) -> List[Task]:
        ...

    def delete_tasks(self, task_ids: Iterable[str]) -> int:
        """Delete all given ids in one commit; return how many were removed."""
        ...


class ResetHourSource(Protocol):
    def get_reset_hour(self) -> int:
        ...


class Clock(Protocol):
    def now(self) -> datetime:
        ...
