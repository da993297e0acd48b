"""Move coordinator.

The single authority for changing a task's manual position or its
domain. Each operation reads the affected domains' open order from the
store, plans the new arrangement with the position allocator, and
persists it as one ordered batch of position writes:

1. source domain renumbered, positions ascending
2. target domain renumbered, positions ascending
3. the moved task's domain and position, always last

Callers must serialize reorder/move calls per user; two concurrent
operations on the same domain race on position values.
"""

import logging

from domo.domain.area import Domain
from domo.domain.shared import DomainError, Err, Ok, Result
from domo.domain.task import (
    PositionWrite,
    Task,
    TaskMoved,
    TaskReordered,
    plan_insert,
    plan_reorder,
    position_writes,
    sort_tasks,
)

from .ports import EntityStore

logger = logging.getLogger(__name__)

ReorderOutcome = tuple[Task, TaskReordered | None]
MoveOutcome = tuple[Task, TaskMoved | TaskReordered | None]


class MoveCoordinator:
    """Reorders tasks inside a domain and moves them between domains.

    Example:
        coordinator = MoveCoordinator(store)
        result = coordinator.move_across_domains("default-user", task_id, inbox_id, 0)
        if isinstance(result, Ok):
            task, event = result.value
    """

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_task(self, user_id: str, task_id: str) -> Result[Task, DomainError]:
        result = self._store.get_task(user_id, task_id)
        if isinstance(result, Err):
            return Err(DomainError.storage(result.error))
        if result.value is None:
            return Err(DomainError.not_found(f"Task not found: {task_id}"))
        return Ok(result.value)

    def load_domain(self, user_id: str, domain_id: str) -> Result[Domain, DomainError]:
        result = self._store.get_domain(user_id, domain_id)
        if isinstance(result, Err):
            return Err(DomainError.storage(result.error))
        if result.value is None:
            return Err(DomainError.not_found(f"Domain not found: {domain_id}"))
        return Ok(result.value)

    def open_order(self, user_id: str, domain_id: str) -> Result[list[Task], DomainError]:
        """The domain's open tasks in manual order."""
        result = self._store.list_open_tasks(user_id, domain_id)
        if isinstance(result, Err):
            return Err(DomainError.storage(result.error))
        return Ok(sort_tasks(result.value, "manual"))

    def _apply(self, user_id: str, writes: list[PositionWrite]) -> Result[None, DomainError]:
        if not writes:
            return Ok(None)
        result = self._store.apply_position_writes(user_id, writes)
        if isinstance(result, Err):
            logger.error(f"Position batch of {len(writes)} writes failed: {result.error}")
            return Err(DomainError.storage(result.error))
        return Ok(None)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def reorder_within_domain(
        self,
        user_id: str,
        domain_id: str,
        task_id: str,
        new_index: int,
    ) -> Result[ReorderOutcome, DomainError]:
        """Move a task to ``new_index`` inside its domain's open order.

        The index is read against the order with the task removed and is
        clamped into range. A task that exists but is not an open member
        of the domain is a no-op.

        Args:
            user_id: Owner of the domain and task.
            domain_id: Domain whose order changes.
            task_id: Task to move.
            new_index: Zero-based target index.

        Returns:
            Ok((task, TaskReordered)) after a change, Ok((task, None)) for
            a no-op, or Err(DomainError) if an id does not resolve or the
            store fails.
        """
        domain = self.load_domain(user_id, domain_id)
        if isinstance(domain, Err):
            return domain

        task = self.load_task(user_id, task_id)
        if isinstance(task, Err):
            return task

        order = self.open_order(user_id, domain_id)
        if isinstance(order, Err):
            return order

        current = order.value
        arranged = plan_reorder(current, task_id, new_index)
        if arranged is None:
            logger.debug(f"Reorder of {task_id} ignored: not open in domain {domain_id}")
            return Ok((task.value, None))

        writes = position_writes(arranged, domain_id)
        applied = self._apply(user_id, writes)
        if isinstance(applied, Err):
            return applied

        if not writes:
            return Ok((task.value, None))

        from_index = [t.id for t in current].index(task_id)
        to_index = [t.id for t in arranged].index(task_id)
        logger.info(
            f"Reordered task {task_id} in domain {domain_id}: "
            f"{from_index} -> {to_index} ({len(writes)} writes)"
        )

        refreshed = self.load_task(user_id, task_id)
        if isinstance(refreshed, Err):
            return refreshed
        event = TaskReordered(
            user_id=user_id,
            task_id=task_id,
            domain_id=domain_id,
            from_index=from_index,
            to_index=to_index,
        )
        return Ok((refreshed.value, event))

    def move_across_domains(
        self,
        user_id: str,
        task_id: str,
        new_domain_id: str,
        new_index: int,
    ) -> Result[MoveOutcome, DomainError]:
        """Move an open task into another domain at ``new_index``.

        The source domain is renumbered to close the gap, the task is
        inserted at ``clamp(new_index, 0, len(target))`` and the target is
        renumbered around it. Every write goes to the store in a single
        ordered batch, the task's own domain/position write last. Moving
        inside the task's current domain is a plain reorder.

        Args:
            user_id: Owner of the task and both domains.
            task_id: Task to move. Must be open and not archived.
            new_domain_id: Destination domain.
            new_index: Zero-based target index in the destination.

        Returns:
            Ok((task, TaskMoved)) with the task as stored afterwards, or
            Err(DomainError): NOT_FOUND for unknown ids, INVALID_STATE for
            a completed or archived task or an inactive target domain,
            STORAGE for store failures.
        """
        task = self.load_task(user_id, task_id)
        if isinstance(task, Err):
            return task
        moving = task.value

        if not moving.is_open:
            state = "archived" if moving.is_archived else moving.status.value
            return Err(DomainError.invalid_state(f"Only open tasks can be moved (task {task_id} is {state})"))

        target_domain = self.load_domain(user_id, new_domain_id)
        if isinstance(target_domain, Err):
            return target_domain

        if moving.domain_id == new_domain_id:
            return self.reorder_within_domain(user_id, new_domain_id, task_id, new_index)

        if not target_domain.value.is_active:
            return Err(DomainError.invalid_state(f"Domain {new_domain_id} is inactive"))

        source = self.open_order(user_id, moving.domain_id)
        if isinstance(source, Err):
            return source
        target = self.open_order(user_id, new_domain_id)
        if isinstance(target, Err):
            return target

        remaining = [t for t in source.value if t.id != task_id]
        arranged, landed = plan_insert(target.value, moving, new_index)

        writes = position_writes(remaining, moving.domain_id)
        writes += position_writes(arranged, new_domain_id, exclude=task_id)
        writes.append(PositionWrite(task_id=task_id, domain_id=new_domain_id, position=landed))

        applied = self._apply(user_id, writes)
        if isinstance(applied, Err):
            return applied

        logger.info(
            f"Moved task {task_id} from domain {moving.domain_id} to {new_domain_id} "
            f"at {landed} ({len(writes)} writes)"
        )

        refreshed = self.load_task(user_id, task_id)
        if isinstance(refreshed, Err):
            return refreshed
        event = TaskMoved(
            user_id=user_id,
            task_id=task_id,
            from_domain_id=moving.domain_id,
            to_domain_id=new_domain_id,
            position=landed,
        )
        return Ok((refreshed.value, event))

    def move_all_to_end(
        self,
        user_id: str,
        source_domain_id: str,
        target_domain_id: str,
    ) -> Result[list[TaskMoved], DomainError]:
        """Append every open task of one domain to the end of another.

        The tasks keep their manual order. The target is renumbered and
        all moved tasks land in one batch, so a store failure leaves both
        domains as they were.

        Returns:
            Ok(one TaskMoved per task, in landing order) or Err(DomainError):
            NOT_FOUND for unknown domains, VALIDATION when source and target
            are the same, INVALID_STATE for an inactive target.
        """
        if source_domain_id == target_domain_id:
            return Err(DomainError.validation("Source and target domain must differ"))

        for domain_id in (source_domain_id, target_domain_id):
            domain = self.load_domain(user_id, domain_id)
            if isinstance(domain, Err):
                return domain
            if domain_id == target_domain_id and not domain.value.is_active:
                return Err(DomainError.invalid_state(f"Domain {target_domain_id} is inactive"))

        source = self.open_order(user_id, source_domain_id)
        if isinstance(source, Err):
            return source
        target = self.open_order(user_id, target_domain_id)
        if isinstance(target, Err):
            return target

        # the source empties completely, so only the target needs writes
        arranged = target.value + source.value
        writes = position_writes(arranged, target_domain_id)

        applied = self._apply(user_id, writes)
        if isinstance(applied, Err):
            return applied

        start = len(target.value)
        events = [
            TaskMoved(
                user_id=user_id,
                task_id=task.id,
                from_domain_id=source_domain_id,
                to_domain_id=target_domain_id,
                position=start + offset,
            )
            for offset, task in enumerate(source.value)
        ]
        logger.info(
            f"Moved {len(events)} tasks from domain {source_domain_id} to {target_domain_id} "
            f"({len(writes)} writes)"
        )
        return Ok(events)
