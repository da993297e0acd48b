"""Base domain event.

Domain events are immutable records of a state change (a task moved, a
domain renamed). Services return them next to the changed entity so
callers can log, audit or broadcast what happened.

Example usage:
    >>> from domo.domain.shared.events import DomainEvent
    >>>
    >>> class TaskPinned(DomainEvent):
    ...     task_id: str
    ...
    >>> event = TaskPinned(user_id="default-user", task_id="t-1")
    >>> event.event_id  # doctest: +SKIP
    '6f2c...'
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event has a unique ID, the owning user and a UTC timestamp.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}
