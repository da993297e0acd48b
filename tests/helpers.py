"""Builders and assertions shared by the test modules."""

from datetime import UTC, datetime, timedelta

from domo.domain.task import Task, is_dense, sort_tasks

USER = "tester"
BASE_TIME = datetime(2026, 1, 1, 9, 0, tzinfo=UTC)


def make_task(title: str, domain_id: str = "dom", position: int = 0, minutes: int = 0, **fields) -> Task:
    """A task created ``minutes`` after BASE_TIME."""
    return Task(
        user_id=fields.pop("user_id", USER),
        domain_id=domain_id,
        title=title,
        domain_sort_order=position,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        **fields,
    )


def open_order(store, domain_id: str, user_id: str = USER) -> list[Task]:
    return sort_tasks(store.list_open_tasks(user_id, domain_id).value, "manual")


def titles(tasks) -> list[str]:
    return [t.title for t in tasks]


def layout(store, domain_id: str, user_id: str = USER) -> list[tuple[str, int]]:
    """(title, position) pairs of a domain's open set in manual order."""
    return [(t.title, t.domain_sort_order) for t in open_order(store, domain_id, user_id)]


def assert_dense(store, domain_id: str, user_id: str = USER) -> None:
    tasks = store.list_open_tasks(user_id, domain_id).value
    assert is_dense(tasks), sorted(t.domain_sort_order for t in tasks)
