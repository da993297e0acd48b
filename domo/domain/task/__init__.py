"""Task domain - tasks and their ordering.

All exports are pure (no I/O, no side effects).

Key Types:
    Task - The unit of work
    TaskStatus - open / completed
    FilterMode - which tasks a list view shows
    SortMode - presentation ordering strategy
    PositionWrite - one "set position" store operation

Sorting:
    sort_tasks - total, deterministic order per sort mode

Positions:
    next_position - append position for a domain's open set
    renumber - dense 0..N-1 positions for an ordering
    plan_reorder - move inside one ordered list
    plan_insert - insert into an ordered list
    position_writes - changed writes for a desired order
    is_dense - check the density invariant

Grouping:
    group_and_order - domain-grouped flat view
"""

from .events import (
    TaskArchived,
    TaskCompleted,
    TaskCreated,
    TaskMoved,
    TaskReopened,
    TaskReordered,
    TaskRestored,
    TasksRenumbered,
    TaskUpdated,
)
from .grouping import group_and_order
from .models import FilterMode, PositionWrite, Task, TaskStatus, utcnow
from .positions import (
    clamp,
    is_dense,
    next_position,
    plan_insert,
    plan_reorder,
    position_writes,
    renumber,
)
from .sorting import SortMode, sort_tasks

__all__ = [
    # Models
    "Task",
    "TaskStatus",
    "FilterMode",
    "PositionWrite",
    "utcnow",
    # Sorting
    "SortMode",
    "sort_tasks",
    # Positions
    "next_position",
    "renumber",
    "clamp",
    "plan_reorder",
    "plan_insert",
    "position_writes",
    "is_dense",
    # Grouping
    "group_and_order",
    # Events
    "TaskCreated",
    "TaskUpdated",
    "TaskReordered",
    "TaskMoved",
    "TasksRenumbered",
    "TaskCompleted",
    "TaskReopened",
    "TaskArchived",
    "TaskRestored",
]
