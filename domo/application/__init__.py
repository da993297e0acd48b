"""Application service layer for Domo.

Services orchestrate domain rules against an EntityStore. Each call is
scoped to an explicit user id and returns a Result.

Services:
    move_service - MoveCoordinator: reorders and cross-domain moves
    task_service - TaskService: task lifecycle and bulk reorder
    domain_service - DomainService: life-area management

Example usage:
    >>> from domo.application import MoveCoordinator
    >>> from domo.infrastructure.storage import MemoryStore
    >>>
    >>> coordinator = MoveCoordinator(MemoryStore())
    >>> result = coordinator.reorder_within_domain("default-user", domain_id, task_id, 0)
"""

from domo.application.domain_service import DomainService
from domo.application.move_service import MoveCoordinator
from domo.application.ports import EntityStore
from domo.application.task_service import TaskChanges, TaskService

__all__ = [
    "EntityStore",
    "MoveCoordinator",
    "TaskService",
    "TaskChanges",
    "DomainService",
]
