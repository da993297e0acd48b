"""Domain error values carried inside ``Err`` results.

Every expected failure of a store, service or coordinator call is an
``Err(DomainError)``. The ``kind`` decides how an interface reports it
(HTTP status code, CLI message); the ``message`` is for humans.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Category of a domain error."""

    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    VALIDATION = "validation"
    STORAGE = "storage"


@dataclass(frozen=True, slots=True)
class DomainError:
    """A rejected operation.

    Attributes:
        kind: Error category.
        message: Human-readable description.
    """

    kind: ErrorKind
    message: str

    @classmethod
    def not_found(cls, message: str) -> "DomainError":
        return cls(kind=ErrorKind.NOT_FOUND, message=message)

    @classmethod
    def invalid_state(cls, message: str) -> "DomainError":
        return cls(kind=ErrorKind.INVALID_STATE, message=message)

    @classmethod
    def validation(cls, message: str) -> "DomainError":
        return cls(kind=ErrorKind.VALIDATION, message=message)

    @classmethod
    def storage(cls, message: str) -> "DomainError":
        return cls(kind=ErrorKind.STORAGE, message=message)

    def __str__(self) -> str:
        return self.message
