"""In-process entity store.

Keeps domains and tasks in dictionaries. Used by tests and throwaway
sessions; nothing is persisted.
"""

import logging
from collections.abc import Mapping, Sequence

from domo.domain.area import Domain
from domo.domain.shared.result import Err, Ok, Result
from domo.domain.task import PositionWrite, Task, utcnow

logger = logging.getLogger(__name__)


def apply_writes(
    tasks: Mapping[str, Task],
    user_id: str,
    writes: Sequence[PositionWrite],
) -> Result[dict[str, Task], str]:
    """Apply position writes, in order, to a copy of a task table.

    Every write is validated before anything is returned, so a bad write
    anywhere in the batch leaves the caller's table untouched.

    Returns:
        Ok(new table) or Err(str) naming the first write that failed.
    """
    updated = dict(tasks)
    now = utcnow()
    for write in writes:
        task = updated.get(write.task_id)
        if task is None or task.user_id != user_id:
            return Err(f"Task not found: {write.task_id}")
        updated[write.task_id] = task.model_copy(
            update={"domain_id": write.domain_id, "domain_sort_order": write.position, "updated_at": now}
        )
    return Ok(updated)


class MemoryStore:
    """Dictionary-backed EntityStore.

    Example:
        store = MemoryStore()
        store.insert_domain(Domain(user_id="default-user", name="Body"))
    """

    def __init__(self) -> None:
        self._domains: dict[str, Domain] = {}
        self._tasks: dict[str, Task] = {}

    # =========================================================================
    # Domains
    # =========================================================================

    def list_domains(self, user_id: str) -> Result[list[Domain], str]:
        domains = [d for d in self._domains.values() if d.user_id == user_id]
        return Ok(sorted(domains, key=lambda d: d.sort_order))

    def get_domain(self, user_id: str, domain_id: str) -> Result[Domain | None, str]:
        domain = self._domains.get(domain_id)
        if domain is None or domain.user_id != user_id:
            return Ok(None)
        return Ok(domain)

    def insert_domain(self, domain: Domain) -> Result[None, str]:
        if domain.id in self._domains:
            return Err(f"Domain already exists: {domain.id}")
        self._domains[domain.id] = domain
        return Ok(None)

    def update_domain(self, domain: Domain) -> Result[None, str]:
        stored = self._domains.get(domain.id)
        if stored is None or stored.user_id != domain.user_id:
            return Err(f"Domain not found: {domain.id}")
        self._domains[domain.id] = domain
        return Ok(None)

    # =========================================================================
    # Tasks
    # =========================================================================

    def list_tasks(self, user_id: str) -> Result[list[Task], str]:
        return Ok([t for t in self._tasks.values() if t.user_id == user_id])

    def list_open_tasks(self, user_id: str, domain_id: str) -> Result[list[Task], str]:
        return Ok(
            [t for t in self._tasks.values() if t.user_id == user_id and t.domain_id == domain_id and t.is_open]
        )

    def get_task(self, user_id: str, task_id: str) -> Result[Task | None, str]:
        task = self._tasks.get(task_id)
        if task is None or task.user_id != user_id:
            return Ok(None)
        return Ok(task)

    def insert_task(self, task: Task) -> Result[None, str]:
        if task.id in self._tasks:
            return Err(f"Task already exists: {task.id}")
        self._tasks[task.id] = task
        return Ok(None)

    def update_task(self, task: Task) -> Result[None, str]:
        stored = self._tasks.get(task.id)
        if stored is None or stored.user_id != task.user_id:
            return Err(f"Task not found: {task.id}")
        self._tasks[task.id] = task
        return Ok(None)

    # =========================================================================
    # Positions
    # =========================================================================

    def update_task_position(self, user_id: str, task_id: str, position: int) -> Result[None, str]:
        task = self._tasks.get(task_id)
        if task is None or task.user_id != user_id:
            return Err(f"Task not found: {task_id}")
        return self.apply_position_writes(
            user_id, [PositionWrite(task_id=task_id, domain_id=task.domain_id, position=position)]
        )

    def update_task_domain_and_position(
        self, user_id: str, task_id: str, domain_id: str, position: int
    ) -> Result[None, str]:
        return self.apply_position_writes(
            user_id, [PositionWrite(task_id=task_id, domain_id=domain_id, position=position)]
        )

    def apply_position_writes(self, user_id: str, writes: Sequence[PositionWrite]) -> Result[None, str]:
        result = apply_writes(self._tasks, user_id, writes)
        if isinstance(result, Err):
            logger.error(f"Rejected position batch for {user_id}: {result.error}")
            return result
        self._tasks = result.value
        return Ok(None)
