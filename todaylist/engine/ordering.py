"""Order key computation for todaylist.

Tasks carry a floating point ``order`` value. Inserting or moving a task only
ever rewrites that one task's key: the new key is chosen so that it sorts
exactly at the requested slot among its neighbours.

All functions here are pure and operate on already sorted key sequences.
"""

from typing import List, Sequence

from todaylist.models.constants import ORDER_KEY_MIN_GAP, ORDER_KEY_STEP, SEED_ORDER_KEY


def compute_order_key(sequence: Sequence[float], target_index: int) -> float:
    """Compute a key that places a new item at ``target_index``.

    Args:
        sequence: Existing keys, sorted ascending (ties allowed)
        target_index: Insertion slot in ``[0, len(sequence)]``

    Returns:
        ``SEED_ORDER_KEY`` for an empty sequence, one step below the head for
        slot 0, one step above the tail for the last slot, otherwise the
        midpoint of the two neighbours.

    Raises:
        ValueError: If ``target_index`` is outside ``[0, len(sequence)]``
    """
    if not sequence:
        return SEED_ORDER_KEY

    if target_index < 0 or target_index > len(sequence):
        raise ValueError(
            f"target_index {target_index} out of range for sequence of length {len(sequence)}"
        )

    if target_index == 0:
        return sequence[0] - ORDER_KEY_STEP
    if target_index >= len(sequence):
        return sequence[-1] + ORDER_KEY_STEP

    prev_key = sequence[target_index - 1]
    next_key = sequence[target_index]
    return (prev_key + next_key) / 2.0


def resolve_move_target(source_index: int, destination: int) -> int:
    """Translate a drag destination into a remove-then-insert slot.

    Drag-and-drop reports ``destination`` as an index into the list *before*
    the item is removed. Removing the source shifts every later index down by
    one, so a downward move lands one slot earlier.
    """
    if source_index < 0 or destination < 0:
        raise ValueError(f"indices must be non-negative (source={source_index}, destination={destination})")
    if source_index < destination:
        return destination - 1
    return destination


def compute_move_order_key(sequence: Sequence[float], source_index: int, destination: int) -> float:
    """Compute the new key for the item at ``source_index`` dragged to ``destination``.

    ``sequence`` includes the moving item's current key. It is removed before
    the insertion slot is resolved, so the result never depends on the item's
    old position.
    """
    if source_index < 0 or source_index >= len(sequence):
        raise ValueError(
            f"source_index {source_index} out of range for sequence of length {len(sequence)}"
        )
    remaining = [key for i, key in enumerate(sequence) if i != source_index]
    target_index = min(resolve_move_target(source_index, destination), len(remaining))
    return compute_order_key(remaining, target_index)


def completed_tail_key(completed_keys: Sequence[float]) -> float:
    """Key for a task that just became completed: tail of the completed group."""
    return compute_order_key(completed_keys, len(completed_keys))


def uncompleted_head_key(uncompleted_keys: Sequence[float]) -> float:
    """Key for a task that was just reopened: head of the uncompleted group."""
    return compute_order_key(uncompleted_keys, 0)


def needs_renormalization(sorted_keys: Sequence[float], min_gap: float = ORDER_KEY_MIN_GAP) -> bool:
    """Whether any two adjacent keys are too close for another midpoint split."""
    for prev_key, next_key in zip(sorted_keys, sorted_keys[1:]):
        if next_key - prev_key <= min_gap:
            return True
    return False


def renormalized_keys(count: int) -> List[float]:
    """Evenly spaced keys for a group of ``count`` items, in display order."""
    return [SEED_ORDER_KEY + i * ORDER_KEY_STEP for i in range(count)]
