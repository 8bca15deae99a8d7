"""Task list operations for todaylist.

The list is shown in two groups: completed tasks first, then open tasks.
Each group is sorted by its own order keys; keys from different groups are
never compared.

Every mutation rewrites only the order key of the task being touched. When
repeated midpoint splits leave two keys too close together, the affected
group is renumbered in place.
"""

import logging
import uuid
from typing import List, Optional

from todaylist.database.repository import TaskRepository
from todaylist.engine.clock import SystemClock
from todaylist.engine.ordering import (
    compute_order_key,
    compute_move_order_key,
    completed_tail_key,
    uncompleted_head_key,
    needs_renormalization,
    renormalized_keys,
)
from todaylist.engine.ports import Clock
from todaylist.models.task import Task

logger = logging.getLogger(__name__)


def sanitize_content(content: str) -> str:
    """Drop line breaks (dictation tends to add them) and trim whitespace."""
    return "".join(content.splitlines()).strip()


class TaskListService:
    """Add, complete, move and delete tasks on today's list."""

    def __init__(self, repository: TaskRepository, clock: Optional[Clock] = None):
        self.repository = repository
        self.clock = clock or SystemClock()

    def list_tasks(self) -> List[Task]:
        """Display order: completed group first, then open tasks."""
        return self.repository.get_group(True) + self.repository.get_group(False)

    def add_task(self, content: str) -> Optional[Task]:
        """Append a task to the end of the open group.

        Returns None when the content is empty after sanitizing.
        """
        text = sanitize_content(content)
        if not text:
            return None

        open_keys = [t.order for t in self.repository.get_group(False)]
        task = Task(
            id=str(uuid.uuid4()),
            content=text,
            is_completed=False,
            order=compute_order_key(open_keys, len(open_keys)),
            created_at=self.clock.now(),
        )
        return self.repository.create(task)

    def toggle_completion(self, task_id: str) -> Optional[Task]:
        """Flip a task's completion flag.

        A task being completed goes to the end of the completed group; a task
        being reopened goes to the top of the open group.
        """
        task = self.repository.get(task_id)
        if task is None:
            return None

        becoming_completed = not task.is_completed
        target_keys = [t.order for t in self.repository.get_group(becoming_completed)]
        if becoming_completed:
            new_order = completed_tail_key(target_keys)
        else:
            new_order = uncompleted_head_key(target_keys)

        updated = self.repository.update(
            task.model_copy(update={"is_completed": becoming_completed, "order": new_order})
        )
        logger.debug(f"Task {task_id} completed={becoming_completed} order={new_order}")
        return updated

    def move_task(self, source_index: int, destination: int) -> List[Task]:
        """Move an open task using drag-and-drop indices into the display list.

        ``destination`` is the slot in the display list before removal.
        Completed tasks cannot be moved, and the destination is clamped to
        the open group. Invalid source indices are ignored.
        """
        display = self.list_tasks()
        if source_index < 0 or source_index >= len(display):
            return display

        moving = display[source_index]
        if moving.is_completed:
            return display

        open_tasks = [t for t in display if not t.is_completed]
        completed_count = len(display) - len(open_tasks)
        group_source = source_index - completed_count
        group_destination = min(max(destination - completed_count, 0), len(open_tasks))

        open_keys = [t.order for t in open_tasks]
        new_order = compute_move_order_key(open_keys, group_source, group_destination)
        remaining = open_keys[:group_source] + open_keys[group_source + 1:]
        if needs_renormalization(sorted(remaining + [new_order])):
            # Target slot has no room left; renumber before placing the key.
            open_tasks = self._renumber(open_tasks, is_completed=False)
            moving = open_tasks[group_source]
            new_order = compute_move_order_key([t.order for t in open_tasks], group_source, group_destination)

        self.repository.update(moving.model_copy(update={"order": new_order}))
        self._renormalize_if_needed(is_completed=False)
        return self.list_tasks()

    def get_task(self, task_id: str) -> Optional[Task]:
        return self.repository.get(task_id)

    def update_content(self, task_id: str, content: str) -> Optional[Task]:
        """Replace a task's text. Raises ValueError if it is blank after sanitizing."""
        text = sanitize_content(content)
        if not text:
            raise ValueError("Task content must not be empty")
        task = self.repository.get(task_id)
        if task is None:
            return None
        return self.repository.update(task.model_copy(update={"content": text}))

    def delete_task(self, task_id: str) -> bool:
        return self.repository.delete(task_id)

    def delete_task_at(self, index: int) -> bool:
        """Delete by display index; out-of-range indices are ignored."""
        display = self.list_tasks()
        if index < 0 or index >= len(display):
            return False
        return self.repository.delete(display[index].id)

    def _renumber(self, group: List[Task], *, is_completed: bool) -> List[Task]:
        """Give ``group`` evenly spaced keys in its current order."""
        keys = renormalized_keys(len(group))
        logger.info(f"Renumbering {len(group)} task(s) (completed={is_completed}) after order keys converged")
        self.repository.reorder([t.id for t in group], keys)
        return [t.model_copy(update={"order": key}) for t, key in zip(group, keys)]

    def _renormalize_if_needed(self, *, is_completed: bool) -> None:
        group = self.repository.get_group(is_completed)
        if needs_renormalization([t.order for t in group]):
            self._renumber(group, is_completed=is_completed)
