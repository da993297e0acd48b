"""Sort engine for task list views.

Pure functions computing a total order over tasks for each sort mode.
Sorting never touches ``domain_sort_order``; it only decides how a read
presents tasks.

Every mode is a key function used with the stable built-in ``sorted``,
so tasks that tie on every key keep their input order.
"""

import math
from collections.abc import Callable, Iterable
from datetime import date
from enum import Enum
from typing import Any

from .models import Task


class SortMode(str, Enum):
    """Presentation ordering strategies."""

    MANUAL = "manual"
    DUE_DATE = "due_date"
    SCHEDULED_DATE = "scheduled_date"
    PRIORITY = "priority"
    EFFORT = "effort"
    COMPLEXITY = "complexity"
    CREATED = "created"

    @classmethod
    def parse(cls, token: "str | SortMode | None") -> "SortMode":
        """Parse a sort token. Unrecognized tokens fall back to MANUAL."""
        try:
            return cls(token)
        except ValueError:
            return cls.MANUAL


# =============================================================================
# Key helpers
# =============================================================================


def _priority_desc(task: Task) -> int:
    # unset priority sorts as 0
    return -(task.priority or 0)


def _created_ts(task: Task) -> float:
    return task.created_at.timestamp()


def _dated_first(value: date | None) -> tuple[int, int]:
    """Dated values first, ascending; undated values last."""
    if value is None:
        return (1, 0)
    return (0, value.toordinal())


def _unset_last(value: int | None) -> float:
    return math.inf if value is None else value


# =============================================================================
# Sort keys per mode
# =============================================================================


def _manual_key(task: Task) -> tuple:
    return (task.domain_sort_order, _created_ts(task))


def _due_date_key(task: Task) -> tuple:
    return (_dated_first(task.due_date), _priority_desc(task), _created_ts(task))


def _scheduled_date_key(task: Task) -> tuple:
    return (_dated_first(task.scheduled_date), _priority_desc(task), _created_ts(task))


def _priority_key(task: Task) -> tuple:
    return (_priority_desc(task), _dated_first(task.due_date), _created_ts(task))


def _effort_key(task: Task) -> tuple:
    return (_unset_last(task.effort_points), _priority_desc(task), _created_ts(task))


def _complexity_key(task: Task) -> tuple:
    return (_unset_last(task.complexity), _priority_desc(task), _created_ts(task))


def _created_key(task: Task) -> tuple:
    # newest first, no secondary key
    return (-_created_ts(task),)


SORT_KEYS: dict[SortMode, Callable[[Task], Any]] = {
    SortMode.MANUAL: _manual_key,
    SortMode.DUE_DATE: _due_date_key,
    SortMode.SCHEDULED_DATE: _scheduled_date_key,
    SortMode.PRIORITY: _priority_key,
    SortMode.EFFORT: _effort_key,
    SortMode.COMPLEXITY: _complexity_key,
    SortMode.CREATED: _created_key,
}


def sort_tasks(tasks: Iterable[Task], mode: "SortMode | str" = SortMode.MANUAL) -> list[Task]:
    """Return tasks ordered by a sort mode.

    The input is not modified. Unknown modes sort manually.

    Args:
        tasks: Any tasks, possibly from several domains. For a meaningful
            manual order pass the open tasks of a single domain.
        mode: A SortMode or its string token.

    Returns:
        A new list in the requested order.
    """
    key = SORT_KEYS[SortMode.parse(mode)]
    return sorted(tasks, key=key)
