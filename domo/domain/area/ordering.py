"""Ordering rules for a user's domains.

Pure functions - no I/O, no side effects.
"""

from collections.abc import Iterable, Sequence

from .models import Domain


def next_sort_order(domains: Iterable[Domain]) -> int:
    """Sort order for a newly created domain (current max + 1, or 0)."""
    return max((d.sort_order for d in domains), default=-1) + 1


def ordered_domains(domains: Iterable[Domain]) -> list[Domain]:
    """Domains by ascending sort order; ties keep creation order."""
    return sorted(domains, key=lambda d: (d.sort_order, d.created_at))


def renumber_domains(domains: Sequence[Domain], ordered_ids: Sequence[str]) -> list[tuple[str, int]]:
    """Dense sort orders for a requested domain ordering.

    Listed ids come first in the given order. Ids that are unknown or
    repeated are ignored. Domains left out of the list follow in their
    current relative order, so every domain ends up with a unique value
    in 0..N-1.

    Args:
        domains: All domains of one user.
        ordered_ids: Requested order, possibly partial.

    Returns:
        (domain_id, sort_order) pairs for every domain.
    """
    known = {d.id for d in domains}
    seen: set[str] = set()
    head: list[str] = []
    for domain_id in ordered_ids:
        if domain_id in known and domain_id not in seen:
            seen.add(domain_id)
            head.append(domain_id)

    tail = [d.id for d in ordered_domains(domains) if d.id not in seen]
    return [(domain_id, index) for index, domain_id in enumerate(head + tail)]
