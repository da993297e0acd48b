"""Domain (life area) application service.

Creation, renaming, activation and ordering of a user's domains.
Deactivating a domain can hand its open tasks to another domain through
the MoveCoordinator.
"""

import logging
from collections.abc import Sequence

from domo.domain.area import (
    SEED_DOMAINS,
    Domain,
    DomainActivationChanged,
    DomainCreated,
    DomainRenamed,
    DomainsReordered,
    next_sort_order,
    ordered_domains,
    renumber_domains,
)
from domo.domain.shared import DomainError, Err, Ok, Result
from domo.domain.task import utcnow

from .move_service import MoveCoordinator
from .ports import EntityStore

logger = logging.getLogger(__name__)


class DomainService:
    """Operations on a user's domains."""

    def __init__(self, store: EntityStore, moves: MoveCoordinator | None = None) -> None:
        self._store = store
        self._moves = moves or MoveCoordinator(store)

    def list_domains(self, user_id: str, include_inactive: bool = True) -> Result[list[Domain], DomainError]:
        """The user's domains by ascending sort order."""
        result = self._store.list_domains(user_id)
        if isinstance(result, Err):
            return Err(DomainError.storage(result.error))
        domains = ordered_domains(result.value)
        if not include_inactive:
            domains = [d for d in domains if d.is_active]
        return Ok(domains)

    def get_domain(self, user_id: str, domain_id: str) -> Result[Domain, DomainError]:
        return self._moves.load_domain(user_id, domain_id)

    def create_domain(
        self,
        user_id: str,
        name: str,
        is_active: bool = True,
    ) -> Result[tuple[Domain, DomainCreated], DomainError]:
        """Add a domain after the user's last one."""
        name = (name or "").strip()
        if not name:
            return Err(DomainError.validation("Domain name cannot be empty"))

        existing = self._store.list_domains(user_id)
        if isinstance(existing, Err):
            return Err(DomainError.storage(existing.error))

        domain = Domain(
            user_id=user_id,
            name=name,
            sort_order=next_sort_order(existing.value),
            is_active=is_active,
        )
        result = self._store.insert_domain(domain)
        if isinstance(result, Err):
            return Err(DomainError.storage(result.error))

        logger.info(f"Created domain {domain.id} '{name}' at {domain.sort_order}")
        event = DomainCreated(user_id=user_id, domain_id=domain.id, name=name, sort_order=domain.sort_order)
        return Ok((domain, event))

    def seed_default_domains(
        self,
        user_id: str,
        names: Sequence[str] = SEED_DOMAINS,
    ) -> Result[list[Domain], DomainError]:
        """Create the default life areas for a user without domains.

        Returns the user's domains; a user that already has some is left
        untouched.
        """
        existing = self.list_domains(user_id)
        if isinstance(existing, Err) or existing.value:
            return existing

        for name in names:
            created = self.create_domain(user_id, name)
            if isinstance(created, Err):
                return created
        return self.list_domains(user_id)

    def rename_domain(
        self,
        user_id: str,
        domain_id: str,
        name: str,
    ) -> Result[tuple[Domain, DomainRenamed], DomainError]:
        name = (name or "").strip()
        if not name:
            return Err(DomainError.validation("Domain name cannot be empty"))

        domain = self._moves.load_domain(user_id, domain_id)
        if isinstance(domain, Err):
            return domain

        renamed = domain.value.model_copy(update={"name": name, "updated_at": utcnow()})
        result = self._store.update_domain(renamed)
        if isinstance(result, Err):
            return Err(DomainError.storage(result.error))

        event = DomainRenamed(user_id=user_id, domain_id=domain_id, old_name=domain.value.name, new_name=name)
        return Ok((renamed, event))

    def set_domain_active(
        self,
        user_id: str,
        domain_id: str,
        is_active: bool,
        reassign_to: str | None = None,
    ) -> Result[tuple[Domain, DomainActivationChanged], DomainError]:
        """Activate or deactivate a domain.

        When deactivating with ``reassign_to``, every open task of the
        domain is appended, in manual order, to the end of the target
        domain in a single batch before the domain is switched off.
        Completed and archived tasks stay where they are.

        Args:
            user_id: Owner of the domains.
            domain_id: Domain to toggle.
            is_active: New activation state.
            reassign_to: Active domain receiving the open tasks.

        Returns:
            Ok((domain, DomainActivationChanged)) or Err(DomainError).
        """
        domain = self._moves.load_domain(user_id, domain_id)
        if isinstance(domain, Err):
            return domain

        moved = 0
        if not is_active and reassign_to is not None:
            reassigned = self._reassign_open_tasks(user_id, domain_id, reassign_to)
            if isinstance(reassigned, Err):
                return reassigned
            moved = reassigned.value

        toggled = domain.value.model_copy(update={"is_active": is_active, "updated_at": utcnow()})
        result = self._store.update_domain(toggled)
        if isinstance(result, Err):
            return Err(DomainError.storage(result.error))

        state = "active" if is_active else "inactive"
        logger.info(f"Domain {domain_id} is now {state} ({moved} tasks reassigned)")
        event = DomainActivationChanged(
            user_id=user_id,
            domain_id=domain_id,
            is_active=is_active,
            reassigned_to=reassign_to if moved else None,
            reassigned_tasks=moved,
        )
        return Ok((toggled, event))

    def _reassign_open_tasks(self, user_id: str, domain_id: str, target_id: str) -> Result[int, DomainError]:
        if target_id == domain_id:
            return Err(DomainError.validation("Cannot reassign tasks to the domain being deactivated"))

        moved = self._moves.move_all_to_end(user_id, domain_id, target_id)
        if isinstance(moved, Err):
            return moved
        return Ok(len(moved.value))

    def reorder_domains(
        self,
        user_id: str,
        ordered_ids: Sequence[str],
    ) -> Result[DomainsReordered, DomainError]:
        """Renumber the user's domains densely from a requested order.

        Unknown ids are ignored; unlisted domains follow the listed ones
        in their current order.
        """
        existing = self._store.list_domains(user_id)
        if isinstance(existing, Err):
            return Err(DomainError.storage(existing.error))

        by_id = {d.id: d for d in existing.value}
        assignments = renumber_domains(existing.value, ordered_ids)
        now = utcnow()
        for domain_id, sort_order in assignments:
            domain = by_id[domain_id]
            if domain.sort_order == sort_order:
                continue
            result = self._store.update_domain(domain.model_copy(update={"sort_order": sort_order, "updated_at": now}))
            if isinstance(result, Err):
                return Err(DomainError.storage(result.error))

        return Ok(DomainsReordered(user_id=user_id, domain_ids=[domain_id for domain_id, _ in assignments]))
