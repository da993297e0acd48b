"""Task application service.

Orchestrates the task lifecycle against an EntityStore: creation,
edits, completion, archival and bulk reordering. Positional changes
that move tasks around a domain's order are delegated to the
MoveCoordinator.
"""

import logging
from datetime import date

from pydantic import BaseModel, Field, ValidationError

from domo.domain.shared import DomainError, Err, Ok, Result
from domo.domain.task import (
    FilterMode,
    SortMode,
    Task,
    TaskArchived,
    TaskCompleted,
    TaskCreated,
    TaskReopened,
    TaskRestored,
    TasksRenumbered,
    TaskStatus,
    TaskUpdated,
    group_and_order,
    next_position,
    position_writes,
    utcnow,
)

from .move_service import MoveCoordinator
from .ports import EntityStore

logger = logging.getLogger(__name__)


class TaskChanges(BaseModel):
    """Partial task edit.

    Only fields that were explicitly set are applied, so an explicit
    ``None`` clears an optional attribute.
    """

    title: str | None = Field(default=None, min_length=1)
    domain_id: str | None = Field(default=None, min_length=1)
    priority: int | None = Field(default=None, ge=1, le=3)
    effort_points: int | None = Field(default=None, ge=1, le=3)
    complexity: int | None = Field(default=None, ge=1, le=5)
    valence: int | None = Field(default=None, ge=-1, le=1)
    scheduled_date: date | None = None
    due_date: date | None = None


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "task"
    return f"Invalid {field}: {first['msg']}"


class TaskService:
    """Task lifecycle operations for one store.

    Every method takes the owning ``user_id`` first and returns
    ``Ok((task, event))`` or ``Err(DomainError)``.
    """

    def __init__(self, store: EntityStore, moves: MoveCoordinator | None = None) -> None:
        self._store = store
        self._moves = moves or MoveCoordinator(store)

    @property
    def moves(self) -> MoveCoordinator:
        return self._moves

    def _save(self, task: Task, *, insert: bool = False) -> Result[Task, DomainError]:
        result = self._store.insert_task(task) if insert else self._store.update_task(task)
        if isinstance(result, Err):
            return Err(DomainError.storage(result.error))
        return Ok(task)

    def _append_position(self, user_id: str, domain_id: str) -> Result[int, DomainError]:
        result = self._store.list_open_tasks(user_id, domain_id)
        if isinstance(result, Err):
            return Err(DomainError.storage(result.error))
        return Ok(next_position(result.value))

    # =========================================================================
    # Reads
    # =========================================================================

    def get_task(self, user_id: str, task_id: str) -> Result[Task, DomainError]:
        return self._moves.load_task(user_id, task_id)

    def list_tasks(
        self,
        user_id: str,
        filter_mode: FilterMode | str = FilterMode.ALL,
        sort_mode: SortMode | str = SortMode.MANUAL,
    ) -> Result[list[Task], DomainError]:
        """Domain-grouped task list for a filter and sort mode.

        Unknown filter tokens mean ``all``, unknown sort tokens ``manual``.
        Tasks of inactive or missing domains are not listed.
        """
        mode = FilterMode.parse(filter_mode)

        tasks = self._store.list_tasks(user_id)
        if isinstance(tasks, Err):
            return Err(DomainError.storage(tasks.error))
        domains = self._store.list_domains(user_id)
        if isinstance(domains, Err):
            return Err(DomainError.storage(domains.error))

        visible = [t for t in tasks.value if t.matches(mode)]
        return Ok(group_and_order(visible, domains.value, SortMode.parse(sort_mode)))

    # =========================================================================
    # Creation and edits
    # =========================================================================

    def create_task(
        self,
        user_id: str,
        domain_id: str,
        title: str,
        priority: int | None = None,
        effort_points: int | None = None,
        complexity: int | None = None,
        valence: int = 0,
        scheduled_date: date | None = None,
        due_date: date | None = None,
    ) -> Result[tuple[Task, TaskCreated], DomainError]:
        """Create an open task at the end of its domain's manual order.

        Returns:
            Ok((task, TaskCreated)), or Err(DomainError) for an empty
            title, out-of-range attributes or an unknown domain.
        """
        title = (title or "").strip()
        if not title:
            return Err(DomainError.validation("Task title cannot be empty"))

        domain = self._moves.load_domain(user_id, domain_id)
        if isinstance(domain, Err):
            return domain

        position = self._append_position(user_id, domain_id)
        if isinstance(position, Err):
            return position

        try:
            task = Task(
                user_id=user_id,
                domain_id=domain_id,
                title=title,
                priority=priority,
                effort_points=effort_points,
                complexity=complexity,
                valence=valence,
                scheduled_date=scheduled_date,
                due_date=due_date,
                domain_sort_order=position.value,
            )
        except ValidationError as e:
            return Err(DomainError.validation(_validation_message(e)))

        saved = self._save(task, insert=True)
        if isinstance(saved, Err):
            return saved

        logger.info(f"Created task {task.id} in domain {domain_id} at {task.domain_sort_order}")
        event = TaskCreated(
            user_id=user_id,
            task_id=task.id,
            domain_id=domain_id,
            position=task.domain_sort_order,
        )
        return Ok((task, event))

    def update_task(
        self,
        user_id: str,
        task_id: str,
        changes: TaskChanges | dict,
    ) -> Result[tuple[Task, TaskUpdated], DomainError]:
        """Apply a partial edit to a task.

        A new ``domain_id`` must name an active domain. An open task is
        moved to the end of that domain's open order by the
        MoveCoordinator, which also renumbers the old domain. A completed
        or archived task only takes the next append position there.
        """
        if isinstance(changes, dict):
            try:
                changes = TaskChanges.model_validate(changes)
            except ValidationError as e:
                return Err(DomainError.validation(_validation_message(e)))

        task = self._moves.load_task(user_id, task_id)
        if isinstance(task, Err):
            return task
        current = task.value

        updates = {name: getattr(changes, name) for name in changes.model_fields_set}
        for required in ("title", "domain_id", "valence"):
            if required in updates and updates[required] is None:
                return Err(DomainError.validation(f"Task {required} cannot be cleared"))
        if "title" in updates:
            updates["title"] = updates["title"].strip()
            if not updates["title"]:
                return Err(DomainError.validation("Task title cannot be empty"))

        new_domain = updates.pop("domain_id", None)
        if new_domain == current.domain_id:
            new_domain = None
        if new_domain is not None:
            domain = self._moves.load_domain(user_id, new_domain)
            if isinstance(domain, Err):
                return domain
            if not domain.value.is_active:
                return Err(DomainError.invalid_state(f"Domain {new_domain} is inactive"))
            if not current.is_open:
                position = self._append_position(user_id, new_domain)
                if isinstance(position, Err):
                    return position
                updates["domain_id"] = new_domain
                updates["domain_sort_order"] = position.value

        try:
            updated = Task.model_validate({**current.model_dump(), **updates, "updated_at": utcnow()})
        except ValidationError as e:
            return Err(DomainError.validation(_validation_message(e)))

        saved = self._save(updated)
        if isinstance(saved, Err):
            return saved

        # open tasks change domain through the coordinator
        if new_domain is not None and current.is_open:
            target = self._moves.open_order(user_id, new_domain)
            if isinstance(target, Err):
                return target
            moved = self._moves.move_across_domains(user_id, task_id, new_domain, len(target.value))
            if isinstance(moved, Err):
                return moved
            updated = moved.value[0]

        event = TaskUpdated(user_id=user_id, task_id=task_id, fields=sorted(changes.model_fields_set))
        return Ok((updated, event))

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def complete_task(self, user_id: str, task_id: str) -> Result[tuple[Task, TaskCompleted], DomainError]:
        """Complete an open task. Its position is frozen, not renumbered."""
        task = self._moves.load_task(user_id, task_id)
        if isinstance(task, Err):
            return task
        if not task.value.is_open:
            return Err(DomainError.invalid_state(f"Task {task_id} is not open"))

        now = utcnow()
        saved = self._save(
            task.value.model_copy(update={"status": TaskStatus.COMPLETED, "completed_at": now, "updated_at": now})
        )
        if isinstance(saved, Err):
            return saved
        return Ok((saved.value, TaskCompleted(user_id=user_id, task_id=task_id)))

    def reopen_task(self, user_id: str, task_id: str) -> Result[tuple[Task, TaskReopened], DomainError]:
        """Reopen a completed task.

        The task keeps its old ``domain_sort_order``. That value can
        collide with a task created while it was completed; the next
        reorder of the domain renumbers it densely.
        """
        task = self._moves.load_task(user_id, task_id)
        if isinstance(task, Err):
            return task
        if task.value.status != TaskStatus.COMPLETED:
            return Err(DomainError.invalid_state(f"Task {task_id} is not completed"))

        saved = self._save(
            task.value.model_copy(update={"status": TaskStatus.OPEN, "completed_at": None, "updated_at": utcnow()})
        )
        if isinstance(saved, Err):
            return saved
        event = TaskReopened(user_id=user_id, task_id=task_id, position=saved.value.domain_sort_order)
        return Ok((saved.value, event))

    def archive_task(self, user_id: str, task_id: str) -> Result[tuple[Task, TaskArchived], DomainError]:
        """Hide a task from active views. Its position is frozen."""
        task = self._moves.load_task(user_id, task_id)
        if isinstance(task, Err):
            return task
        if task.value.is_archived:
            return Err(DomainError.invalid_state(f"Task {task_id} is already archived"))

        now = utcnow()
        saved = self._save(task.value.model_copy(update={"archived_at": now, "updated_at": now}))
        if isinstance(saved, Err):
            return saved
        return Ok((saved.value, TaskArchived(user_id=user_id, task_id=task_id)))

    def restore_task(self, user_id: str, task_id: str) -> Result[tuple[Task, TaskRestored], DomainError]:
        """Bring an archived task back, appended after the domain's current max position."""
        task = self._moves.load_task(user_id, task_id)
        if isinstance(task, Err):
            return task
        if not task.value.is_archived:
            return Err(DomainError.invalid_state(f"Task {task_id} is not archived"))

        position = self._append_position(user_id, task.value.domain_id)
        if isinstance(position, Err):
            return position

        saved = self._save(
            task.value.model_copy(
                update={"archived_at": None, "domain_sort_order": position.value, "updated_at": utcnow()}
            )
        )
        if isinstance(saved, Err):
            return saved
        event = TaskRestored(user_id=user_id, task_id=task_id, position=position.value)
        return Ok((saved.value, event))

    # =========================================================================
    # Bulk reorder
    # =========================================================================

    def reorder_domain_tasks(
        self,
        user_id: str,
        domain_id: str,
        ordered_task_ids: list[str],
    ) -> Result[TasksRenumbered, DomainError]:
        """Renumber a domain's open tasks from a full client ordering.

        Ids that are not open members of the domain are ignored. Open
        members missing from the list keep their relative order after the
        listed ones.
        """
        domain = self._moves.load_domain(user_id, domain_id)
        if isinstance(domain, Err):
            return domain

        order = self._moves.open_order(user_id, domain_id)
        if isinstance(order, Err):
            return order

        members = {t.id: t for t in order.value}
        listed = list(dict.fromkeys(i for i in ordered_task_ids if i in members))
        placed = set(listed)
        rest = [t.id for t in order.value if t.id not in placed]
        arranged = [members[i] for i in listed + rest]

        writes = position_writes(arranged, domain_id)
        if writes:
            result = self._store.apply_position_writes(user_id, writes)
            if isinstance(result, Err):
                return Err(DomainError.storage(result.error))

        logger.info(f"Renumbered {len(arranged)} tasks in domain {domain_id} ({len(writes)} writes)")
        return Ok(TasksRenumbered(user_id=user_id, domain_id=domain_id, task_ids=[t.id for t in arranged]))
