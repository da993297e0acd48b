"""Domain-grouped presentation of a flat task list."""

from collections import defaultdict
from collections.abc import Iterable

from domo.domain.area.models import Domain

from .models import Task
from .sorting import SortMode, sort_tasks


def group_and_order(
    tasks: Iterable[Task],
    domains: Iterable[Domain],
    mode: "SortMode | str" = SortMode.MANUAL,
) -> list[Task]:
    """Group tasks by domain and flatten them in domain order.

    Only active domains take part, ordered by ``sort_order``. Inside each
    domain the tasks are sorted with the requested mode. Tasks whose
    domain is missing or inactive are left out of the result.

    Args:
        tasks: Flat task list, any order.
        domains: The user's domains, any order.
        mode: Sort mode applied inside each domain bucket.

    Returns:
        Tasks concatenated bucket by bucket.
    """
    buckets: dict[str, list[Task]] = defaultdict(list)
    for task in tasks:
        buckets[task.domain_id].append(task)

    active = sorted((d for d in domains if d.is_active), key=lambda d: d.sort_order)

    result: list[Task] = []
    for domain in active:
        result.extend(sort_tasks(buckets.get(domain.id, []), mode))
    return result
