"""Task domain models.

Pure domain models for tasks. Uses Pydantic for validation and
serialization; updates go through ``model_copy`` so instances handed to
callers are never mutated in place.
"""

from datetime import UTC, date, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    """Current UTC time."""
    return datetime.now(UTC)


class TaskStatus(str, Enum):
    """Completion status of a task.

    Archival is tracked separately through ``archived_at``.
    """

    OPEN = "open"
    COMPLETED = "completed"


class FilterMode(str, Enum):
    """Which tasks a list view shows."""

    ALL = "all"
    OPEN = "open"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    @classmethod
    def parse(cls, token: str | None) -> "FilterMode":
        """Parse a filter token, falling back to ALL for anything unknown."""
        try:
            return cls(token)
        except ValueError:
            return cls.ALL


class Task(BaseModel):
    """The unit of work.

    ``domain_sort_order`` is the manual position of the task inside the
    open, non-archived tasks of its domain. Completed and archived tasks
    keep their last value, which is no longer meaningful for ordering.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    domain_id: str
    title: str = Field(min_length=1)
    status: TaskStatus = TaskStatus.OPEN
    priority: int | None = Field(default=None, ge=1, le=3)
    effort_points: int | None = Field(default=None, ge=1, le=3)
    complexity: int | None = Field(default=None, ge=1, le=5)
    valence: int = Field(default=0, ge=-1, le=1)
    scheduled_date: date | None = None
    due_date: date | None = None
    domain_sort_order: int = 0
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None
    archived_at: datetime | None = None

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    @property
    def is_open(self) -> bool:
        """True if the task belongs to its domain's manual-order set."""
        return self.status == TaskStatus.OPEN and self.archived_at is None

    def matches(self, mode: FilterMode) -> bool:
        """Check whether the task is visible under a filter mode."""
        if mode == FilterMode.ARCHIVED:
            return self.is_archived
        if self.is_archived:
            return False
        if mode == FilterMode.OPEN:
            return self.status == TaskStatus.OPEN
        if mode == FilterMode.COMPLETED:
            return self.status == TaskStatus.COMPLETED
        return True


class PositionWrite(BaseModel):
    """One idempotent "set position" operation.

    A move or reorder is persisted as an ordered list of these. Applying
    the same list twice leaves the store in the same state.
    """

    task_id: str
    domain_id: str
    position: int

    model_config = {"frozen": True}
