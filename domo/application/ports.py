"""Storage port used by the application services.

Any persistence backend that offers these calls can sit behind the
services. Every call is scoped to an explicit ``user_id``; a record owned
by another user is reported as missing. Read misses are ``Ok(None)``,
I/O failures are ``Err(message)``.
"""

from collections.abc import Sequence
from typing import Protocol

from domo.domain.area import Domain
from domo.domain.shared import Result
from domo.domain.task import PositionWrite, Task


class EntityStore(Protocol):
    # Domains
    def list_domains(self, user_id: str) -> Result[list[Domain], str]:
        ...

    def get_domain(self, user_id: str, domain_id: str) -> Result[Domain | None, str]:
        ...

    def insert_domain(self, domain: Domain) -> Result[None, str]:
        ...

    def update_domain(self, domain: Domain) -> Result[None, str]:
        ...

    # Tasks
    def list_tasks(self, user_id: str) -> Result[list[Task], str]:
        ...

    def list_open_tasks(self, user_id: str, domain_id: str) -> Result[list[Task], str]:
        ...

    def get_task(self, user_id: str, task_id: str) -> Result[Task | None, str]:
        ...

    def insert_task(self, task: Task) -> Result[None, str]:
        ...

    def update_task(self, task: Task) -> Result[None, str]:
        ...

    # Positions
    def update_task_position(self, user_id: str, task_id: str, position: int) -> Result[None, str]:
        ...

    def update_task_domain_and_position(
        self, user_id: str, task_id: str, domain_id: str, position: int
    ) -> Result[None, str]:
        ...

    def apply_position_writes(self, user_id: str, writes: Sequence[PositionWrite]) -> Result[None, str]:
        """Apply writes in order, all-or-nothing where the backend allows."""
        ...
