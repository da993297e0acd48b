"""Area package - the life-area domains that group tasks.

Exports the Domain model, its ordering rules and events.
"""

from domo.domain.area.events import (
    DomainActivationChanged,
    DomainCreated,
    DomainRenamed,
    DomainsReordered,
)
from domo.domain.area.models import SEED_DOMAINS, Domain
from domo.domain.area.ordering import next_sort_order, ordered_domains, renumber_domains

__all__ = [
    "Domain",
    "SEED_DOMAINS",
    "next_sort_order",
    "ordered_domains",
    "renumber_domains",
    "DomainCreated",
    "DomainRenamed",
    "DomainActivationChanged",
    "DomainsReordered",
]
