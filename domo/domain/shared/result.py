"""Result monad for explicit error handling in domain operations.

Operations that can fail for expected reasons (a missing task, a move
that is not allowed) return ``Ok(value)`` or ``Err(error)`` instead of
raising. Callers branch on the result type.

Example usage:
    >>> def find_domain(domains: dict, domain_id: str) -> Result[str, str]:
    ...     if domain_id not in domains:
    ...         return Err(f"Domain not found: {domain_id}")
    ...     return Ok(domains[domain_id])
    ...
    >>> result = find_domain({"d1": "Body"}, "d1")
    >>> if isinstance(result, Ok):
    ...     print(result.value)
    Body
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def unwrap_or(result: Ok[T] | Err[E], default: T) -> T:
    """Return the Ok value, or ``default`` for an Err."""
    if isinstance(result, Ok):
        return result.value
    return default
