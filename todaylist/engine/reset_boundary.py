"""Daily reset boundary logic for todaylist.

The list is cleared once per day at a configured hour. The boundary is the
most recent ``reset_hour:00`` that is not after ``now``; anything created
strictly before it belongs to a previous day.

Calendar arithmetic happens in ``now``'s own timezone: a naive ``now`` yields
a naive boundary, an aware ``now`` yields a boundary in the same zone.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Tuple, TypeVar

from todaylist.models.constants import MAX_RESET_HOUR, MIN_RESET_HOUR

T = TypeVar("T")


def _validate_reset_hour(reset_hour: int) -> None:
    if not MIN_RESET_HOUR <= reset_hour <= MAX_RESET_HOUR:
        raise ValueError(f"reset_hour must be between {MIN_RESET_HOUR} and {MAX_RESET_HOUR}, got {reset_hour}")


def compute_last_reset_boundary(now: datetime, reset_hour: int) -> datetime:
    """Return the most recent reset boundary at or before ``now``.

    Args:
        now: Reference instant
        reset_hour: Hour of day (0-23) at which a new day starts

    Returns:
        Today's ``reset_hour:00:00`` if ``now`` has reached it, otherwise
        yesterday's.

    Raises:
        ValueError: If ``reset_hour`` is outside 0-23
    """
    _validate_reset_hour(reset_hour)

    today_boundary = now.replace(hour=reset_hour, minute=0, second=0, microsecond=0)
    if now < today_boundary:
        return today_boundary - timedelta(days=1)
    return today_boundary


def next_reset_boundary(now: datetime, reset_hour: int) -> datetime:
    """Return the first reset boundary strictly after ``now``."""
    return compute_last_reset_boundary(now, reset_hour) + timedelta(days=1)


def is_stale(created_at: datetime, boundary: datetime) -> bool:
    """A task is stale when created strictly before the boundary."""
    return created_at < boundary


def partition_stale(tasks: Iterable[T], boundary: datetime) -> Tuple[List[T], List[T]]:
    """Split tasks into (stale, fresh) by ``created_at``, keeping input order."""
    stale: List[T] = []
    fresh: List[T] = []
    for task in tasks:
        if is_stale(task.created_at, boundary):
            stale.append(task)
        else:
            fresh.append(task)
    return stale, fresh
