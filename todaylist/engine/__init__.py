"""Ordering and daily reset engine for todaylist."""

from todaylist.engine.ordering import (
    compute_order_key,
    compute_move_order_key,
    resolve_move_target,
    completed_tail_key,
    uncompleted_head_key,
    needs_renormalization,
    renormalized_keys,
)
from todaylist.engine.reset_boundary import (
    compute_last_reset_boundary,
    next_reset_boundary,
    is_stale,
    partition_stale,
)
from todaylist.engine.orchestrator import ResetOrchestrator, ResetResult, ResetState, run_reset_loop
from todaylist.engine.clock import SystemClock, FixedClock

__all__ = [
    "compute_order_key",
    "compute_move_order_key",
    "resolve_move_target",
    "completed_tail_key",
    "uncompleted_head_key",
    "needs_renormalization",
    "renormalized_keys",
    "compute_last_reset_boundary",
    "next_reset_boundary",
    "is_stale",
    "partition_stale",
    "ResetOrchestrator",
    "ResetResult",
    "ResetState",
    "run_reset_loop",
    "SystemClock",
    "FixedClock",
]
