"""Shared domain building blocks.

- Result monad for explicit error handling
- DomainError values carried by Err results
- Base domain event

Example usage:
    >>> from domo.domain.shared import Ok, Err, DomainError
    >>>
    >>> def load(task_id: str):
    ...     if task_id == "missing":
    ...         return Err(DomainError.not_found(f"Task not found: {task_id}"))
    ...     return Ok(task_id)
"""

from domo.domain.shared.errors import DomainError, ErrorKind
from domo.domain.shared.events import DomainEvent
from domo.domain.shared.result import Err, Ok, Result, unwrap_or

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "unwrap_or",
    # Errors
    "DomainError",
    "ErrorKind",
    # Domain events
    "DomainEvent",
]
