"""Reset orchestrator for todaylist.

Runs a reset pass over the whole task collection:

1. read every task and the configured reset hour,
2. compute the last reset boundary for ``now``,
3. delete the tasks created before it in a single batch.

At most one pass runs at a time. A trigger that arrives while a pass is in
flight is dropped, not queued: the next scheduled trigger covers it.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from todaylist.engine.clock import SystemClock
from todaylist.engine.ports import Clock, ResetHourSource, TaskSource
from todaylist.engine.reset_boundary import compute_last_reset_boundary, partition_stale
from todaylist.models.constants import DEFAULT_RESET_CHECK_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class ResetState(str, Enum):
    """Orchestrator run state."""
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class ResetResult:
    """Outcome of one completed reset pass."""
    ran_at: datetime
    boundary: datetime
    deleted_ids: List[str] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted_ids)


class ResetOrchestrator:
    """Single-flight driver for the daily purge."""

    def __init__(self, source: TaskSource, settings: ResetHourSource, clock: Optional[Clock] = None):
        self.source = source
        self.settings = settings
        self.clock = clock or SystemClock()
        self._state = ResetState.IDLE
        self._state_lock = threading.Lock()
        self.last_result: Optional[ResetResult] = None

    @property
    def state(self) -> ResetState:
        return self._state

    def _try_begin(self) -> bool:
        with self._state_lock:
            if self._state is not ResetState.IDLE:
                return False
            self._state = ResetState.RUNNING
            return True

    def _finish(self) -> None:
        with self._state_lock:
            self._state = ResetState.IDLE

    def run_reset_pass(self, now: Optional[datetime] = None) -> int:
        """Purge tasks created before the last reset boundary.

        Args:
            now: Reference instant (defaults to the orchestrator's clock). A naive
                value is taken as UTC, the same way stored timestamps are.

        Returns:
            Number of tasks deleted. 0 when nothing is stale or when another
            pass is already running.

        Storage errors propagate; the orchestrator is left idle so the next
        trigger retries with the same stale set.
        """
        if not self._try_begin():
            logger.debug("Reset pass already running; skipping trigger")
            return 0

        try:
            if now is None:
                now = self.clock.now()
            elif now.tzinfo is None:
                now = now.replace(tzinfo=timezone.utc)

            tasks = self.source.list_tasks()
            reset_hour = self.settings.get_reset_hour()
            boundary = compute_last_reset_boundary(now, reset_hour)
            stale, _ = partition_stale(tasks, boundary)

            result = ResetResult(ran_at=now, boundary=boundary)
            if not stale:
                self.last_result = result
                return 0

            stale_ids = [task.id for task in stale]
            deleted = self.source.delete_tasks(stale_ids)
            result.deleted_ids = stale_ids
            self.last_result = result
            logger.info(f"Reset pass removed {deleted} task(s) created before {boundary.isoformat()}")
            return deleted
        finally:
            self._finish()


async def run_reset_loop(
        orchestrator: ResetOrchestrator,
        *,
        interval_seconds: float = DEFAULT_RESET_CHECK_INTERVAL_SECONDS,
) -> None:
    """Run a reset pass immediately, then once every ``interval_seconds``.

    Passes run in a worker thread so the event loop is never blocked by the
    storage layer. A failed pass is logged and retried on the next tick.

    To stop the loop, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        try:
            await asyncio.to_thread(orchestrator.run_reset_pass)
        except Exception:
            logger.exception("Reset pass failed; will retry on next tick")

        await asyncio.sleep(sleep_s)
