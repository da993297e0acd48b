"""Domain (life area) events."""

from domo.domain.shared.events import DomainEvent


class DomainCreated(DomainEvent):
    """A domain was added at the end of the user's domain order."""

    domain_id: str
    name: str
    sort_order: int


class DomainRenamed(DomainEvent):
    """A domain name changed."""

    domain_id: str
    old_name: str
    new_name: str


class DomainActivationChanged(DomainEvent):
    """A domain was activated or deactivated."""

    domain_id: str
    is_active: bool
    reassigned_to: str | None = None
    reassigned_tasks: int = 0


class DomainsReordered(DomainEvent):
    """The user's domains were renumbered."""

    domain_ids: list[str]
