"""Task domain events.

Immutable records of task state changes, returned by the application
services next to the changed task. Pure data, no I/O.
"""

from domo.domain.shared.events import DomainEvent


class TaskCreated(DomainEvent):
    """A task was appended to a domain's open set."""

    task_id: str
    domain_id: str
    position: int


class TaskUpdated(DomainEvent):
    """Task attributes were edited."""

    task_id: str
    fields: list[str]


class TaskReordered(DomainEvent):
    """A task changed position inside its domain."""

    task_id: str
    domain_id: str
    from_index: int
    to_index: int


class TaskMoved(DomainEvent):
    """A task moved to another domain at a given position."""

    task_id: str
    from_domain_id: str
    to_domain_id: str
    position: int


class TasksRenumbered(DomainEvent):
    """A domain's open set was renumbered from a full client ordering."""

    domain_id: str
    task_ids: list[str]


class TaskCompleted(DomainEvent):
    """A task was completed. Its position is frozen."""

    task_id: str


class TaskReopened(DomainEvent):
    """A completed task was reopened with its old position."""

    task_id: str
    position: int


class TaskArchived(DomainEvent):
    """A task left the active views."""

    task_id: str


class TaskRestored(DomainEvent):
    """An archived task was re-appended to its domain."""

    task_id: str
    position: int
