"""Manual position allocation.

Pure functions that assign and renumber ``domain_sort_order`` values and
plan the arrangement produced by a reorder or a cross-domain move. They
never fail and never touch storage; the move coordinator turns their
output into store writes.
"""

from collections.abc import Iterable, Sequence

from .models import PositionWrite, Task


def next_position(open_tasks: Iterable[Task]) -> int:
    """Position for a task appended at the end of a domain's open set.

    Args:
        open_tasks: The current open tasks of the domain.

    Returns:
        ``max(domain_sort_order) + 1``, or 0 for an empty domain.
    """
    return max((t.domain_sort_order for t in open_tasks), default=-1) + 1


def renumber(ordered_task_ids: Sequence[str]) -> list[tuple[str, int]]:
    """Assign dense positions 0..N-1 in the exact order given.

    Ids are not checked against any domain; callers make sure membership
    is correct first.

    Example:
        >>> renumber(["b", "a", "c"])
        [('b', 0), ('a', 1), ('c', 2)]
    """
    return [(task_id, index) for index, task_id in enumerate(ordered_task_ids)]


def clamp(index: int, low: int, high: int) -> int:
    """Clamp an index into ``[low, high]``."""
    return max(low, min(index, high))


def plan_reorder(ordered: Sequence[Task], task_id: str, new_index: int) -> list[Task] | None:
    """Move one task inside a manually ordered list.

    The target index is read against the list after the task has been
    removed, matching drag-and-drop semantics.

    Args:
        ordered: The domain's open tasks in manual order.
        task_id: Task to move.
        new_index: Zero-based target index, clamped into range.

    Returns:
        The new order, or None if the task is not in the list.
    """
    current = next((i for i, t in enumerate(ordered) if t.id == task_id), None)
    if current is None:
        return None

    remaining = list(ordered)
    moving = remaining.pop(current)
    remaining.insert(clamp(new_index, 0, len(remaining)), moving)
    return remaining


def plan_insert(ordered: Sequence[Task], task: Task, new_index: int) -> tuple[list[Task], int]:
    """Insert a task that is not yet part of a manually ordered list.

    Returns:
        (new order, index the task landed at).
    """
    target = clamp(new_index, 0, len(ordered))
    arranged = list(ordered)
    arranged.insert(target, task)
    return arranged, target


def position_writes(
    ordered: Sequence[Task],
    domain_id: str,
    exclude: str | None = None,
) -> list[PositionWrite]:
    """Turn a desired order into the writes that make it persistent.

    Positions come from ``renumber`` over the whole order, so any gaps or
    duplicates already in storage are healed. Writes are emitted in
    ascending position order and only for tasks whose stored position or
    domain differs from the target.

    Args:
        ordered: Tasks in their desired order.
        domain_id: Domain the order belongs to.
        exclude: Task id whose write is left to the caller.

    Returns:
        Writes in ascending position order.
    """
    by_id = {t.id: t for t in ordered}
    writes: list[PositionWrite] = []
    for task_id, position in renumber([t.id for t in ordered]):
        if task_id == exclude:
            continue
        task = by_id[task_id]
        if task.domain_sort_order == position and task.domain_id == domain_id:
            continue
        writes.append(PositionWrite(task_id=task_id, domain_id=domain_id, position=position))
    return writes


def is_dense(open_tasks: Iterable[Task]) -> bool:
    """Check that open positions are exactly 0..N-1 with no duplicates."""
    positions = sorted(t.domain_sort_order for t in open_tasks)
    return positions == list(range(len(positions)))
