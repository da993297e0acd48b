"""JSON-file entity store.

One document per user under ``<data_dir>/users/<user_id>.json`` holding
that user's domains and tasks. Every write loads the document, applies
the change and atomically replaces the file, so a batch of position
writes lands completely or not at all.
"""

import logging
import re
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from domo.domain.area import Domain
from domo.domain.shared.result import Err, Ok, Result
from domo.domain.task import PositionWrite, Task

from .json_storage import JsonStorage
from .memory_store import apply_writes

logger = logging.getLogger(__name__)

_USER_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


class UserDocument:
    """A user's domains and tasks, keyed by id."""

    def __init__(self, domains: dict[str, Domain] | None = None, tasks: dict[str, Task] | None = None) -> None:
        self.domains = domains or {}
        self.tasks = tasks or {}

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "UserDocument":
        domains = [Domain.model_validate(d) for d in data.get("domains", [])]
        tasks = [Task.model_validate(t) for t in data.get("tasks", [])]
        return cls({d.id: d for d in domains}, {t.id: t for t in tasks})

    def to_json(self) -> dict[str, Any]:
        return {
            "domains": [d.model_dump(mode="json") for d in self.domains.values()],
            "tasks": [t.model_dump(mode="json") for t in self.tasks.values()],
        }


class JsonStore:
    """EntityStore persisting each user's records to one JSON document."""

    def __init__(self, data_dir: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the store.

        Args:
            data_dir: Root directory for user documents.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._data_dir = Path(data_dir)
        self._storage = storage or JsonStorage()

    def _path(self, user_id: str) -> Path:
        return self._data_dir / "users" / f"{user_id}.json"

    def _load(self, user_id: str) -> Result[UserDocument, str]:
        if not _USER_ID.match(user_id):
            return Err(f"Invalid user id: {user_id!r}")

        path = self._path(user_id)
        if not path.exists():
            return Ok(UserDocument())

        result = self._storage.load_json(path)
        if isinstance(result, Err):
            return result
        try:
            return Ok(UserDocument.from_json(result.value))
        except ValidationError as e:
            return Err(f"Invalid data for user {user_id}: {e}")

    def _save(self, user_id: str, document: UserDocument) -> Result[None, str]:
        result = self._storage.save_json(self._path(user_id), document.to_json())
        if isinstance(result, Err):
            logger.error(f"Saving data for {user_id} failed: {result.error}")
        return result

    def _modify(self, user_id: str, change: Callable[[UserDocument], Result[None, str]]) -> Result[None, str]:
        loaded = self._load(user_id)
        if isinstance(loaded, Err):
            return loaded
        changed = change(loaded.value)
        if isinstance(changed, Err):
            return changed
        return self._save(user_id, loaded.value)

    # =========================================================================
    # Domains
    # =========================================================================

    def list_domains(self, user_id: str) -> Result[list[Domain], str]:
        loaded = self._load(user_id)
        if isinstance(loaded, Err):
            return loaded
        return Ok(sorted(loaded.value.domains.values(), key=lambda d: d.sort_order))

    def get_domain(self, user_id: str, domain_id: str) -> Result[Domain | None, str]:
        loaded = self._load(user_id)
        if isinstance(loaded, Err):
            return loaded
        return Ok(loaded.value.domains.get(domain_id))

    def insert_domain(self, domain: Domain) -> Result[None, str]:
        def change(doc: UserDocument) -> Result[None, str]:
            if domain.id in doc.domains:
                return Err(f"Domain already exists: {domain.id}")
            doc.domains[domain.id] = domain
            return Ok(None)

        return self._modify(domain.user_id, change)

    def update_domain(self, domain: Domain) -> Result[None, str]:
        def change(doc: UserDocument) -> Result[None, str]:
            if domain.id not in doc.domains:
                return Err(f"Domain not found: {domain.id}")
            doc.domains[domain.id] = domain
            return Ok(None)

        return self._modify(domain.user_id, change)

    # =========================================================================
    # Tasks
    # =========================================================================

    def list_tasks(self, user_id: str) -> Result[list[Task], str]:
        loaded = self._load(user_id)
        if isinstance(loaded, Err):
            return loaded
        return Ok(list(loaded.value.tasks.values()))

    def list_open_tasks(self, user_id: str, domain_id: str) -> Result[list[Task], str]:
        loaded = self._load(user_id)
        if isinstance(loaded, Err):
            return loaded
        return Ok([t for t in loaded.value.tasks.values() if t.domain_id == domain_id and t.is_open])

    def get_task(self, user_id: str, task_id: str) -> Result[Task | None, str]:
        loaded = self._load(user_id)
        if isinstance(loaded, Err):
            return loaded
        return Ok(loaded.value.tasks.get(task_id))

    def insert_task(self, task: Task) -> Result[None, str]:
        def change(doc: UserDocument) -> Result[None, str]:
            if task.id in doc.tasks:
                return Err(f"Task already exists: {task.id}")
            doc.tasks[task.id] = task
            return Ok(None)

        return self._modify(task.user_id, change)

    def update_task(self, task: Task) -> Result[None, str]:
        def change(doc: UserDocument) -> Result[None, str]:
            if task.id not in doc.tasks:
                return Err(f"Task not found: {task.id}")
            doc.tasks[task.id] = task
            return Ok(None)

        return self._modify(task.user_id, change)

    # =========================================================================
    # Positions
    # =========================================================================

    def update_task_position(self, user_id: str, task_id: str, position: int) -> Result[None, str]:
        task = self.get_task(user_id, task_id)
        if isinstance(task, Err):
            return task
        if task.value is None:
            return Err(f"Task not found: {task_id}")
        return self.apply_position_writes(
            user_id, [PositionWrite(task_id=task_id, domain_id=task.value.domain_id, position=position)]
        )

    def update_task_domain_and_position(
        self, user_id: str, task_id: str, domain_id: str, position: int
    ) -> Result[None, str]:
        return self.apply_position_writes(
            user_id, [PositionWrite(task_id=task_id, domain_id=domain_id, position=position)]
        )

    def apply_position_writes(self, user_id: str, writes: Sequence[PositionWrite]) -> Result[None, str]:
        def change(doc: UserDocument) -> Result[None, str]:
            result = apply_writes(doc.tasks, user_id, writes)
            if isinstance(result, Err):
                return result
            doc.tasks = result.value
            return Ok(None)

        return self._modify(user_id, change)
