"""Repository layer for task database operations."""

import logging
from typing import Iterable, List, Optional, Set
from sqlalchemy.orm import Session

from todaylist.models.task import Task
from todaylist.database.models import TaskDB

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _as_unique_ids(self, task_ids: Iterable[str]) -> List[str]:
        """Deduplicate while preserving order."""
        seen: Set[str] = set()
        unique: List[str] = []
        for task_id in task_ids:
            if task_id not in seen:
                seen.add(task_id)
                unique.append(task_id)
        return unique

    def create(self, task: Task) -> Task:
        """Create a new task."""
        try:
            task_db = TaskDB.from_pydantic(task)
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task.id}: {task.content[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        return task_db.to_pydantic() if task_db else None

    def get_all(self) -> List[Task]:
        """Get all tasks sorted by order key, ties broken by id."""
        tasks_db = self.db.query(TaskDB).order_by(TaskDB.order_key, TaskDB.id).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def get_group(self, is_completed: bool) -> List[Task]:
        """Get one completion group sorted by order key, ties broken by id."""
        tasks_db = (
            self.db.query(TaskDB)
            .filter(TaskDB.is_completed == is_completed)
            .order_by(TaskDB.order_key, TaskDB.id)
            .all()
        )
        return [task_db.to_pydantic() for task_db in tasks_db]

    def update(self, task: Task) -> Task:
        """Update content, completion flag and order key of an existing task."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task.id).first()
        if not task_db:
            raise ValueError(f"Task {task.id} not found")

        task_db.content = task.content
        task_db.is_completed = task.is_completed
        task_db.order_key = task.order

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task.id}: order={task.order} completed={task.is_completed}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def reorder(self, task_ids: List[str], order_keys: List[float]) -> None:
        """Rewrite the order keys of several tasks in one commit."""
        if len(task_ids) != len(order_keys):
            raise ValueError("task_ids and order_keys must have the same length")
        if not task_ids:
            return

        rows = {row.id: row for row in self.db.query(TaskDB).filter(TaskDB.id.in_(task_ids)).all()}
        try:
            for task_id, key in zip(task_ids, order_keys):
                row = rows.get(task_id)
                if row is not None:
                    row.order_key = key
            self.db.commit()
            logger.debug(f"Renumbered {len(rows)} tasks")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to renumber tasks: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, task_id: str) -> bool:
        """Permanently delete a task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        if not task_db:
            return False

        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise

    def bulk_delete(self, task_ids: Iterable[str]) -> int:
        """Permanently delete multiple tasks in a single commit.

        Unknown ids are ignored. Returns the number of rows removed.
        """
        unique_ids = self._as_unique_ids(task_ids)
        if not unique_ids:
            return 0

        try:
            affected = (
                self.db.query(TaskDB)
                .filter(TaskDB.id.in_(unique_ids))
                .delete(synchronize_session=False)
            )
            self.db.commit()
            logger.debug(f"Deleted {affected} tasks")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to bulk delete tasks: {type(e).__name__}: {str(e)}")
            raise
