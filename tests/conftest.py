"""Shared fixtures: an in-memory store, services and two domains."""

import pytest

from domo.application import DomainService, MoveCoordinator, TaskService
from domo.infrastructure.storage import MemoryStore

from helpers import USER


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def moves(store):
    return MoveCoordinator(store)


@pytest.fixture
def tasks(store, moves):
    return TaskService(store, moves)


@pytest.fixture
def domains(store, moves):
    return DomainService(store, moves)


@pytest.fixture
def area_a(domains):
    domain, _ = domains.create_domain(USER, "A").value
    return domain


@pytest.fixture
def area_b(domains, area_a):
    domain, _ = domains.create_domain(USER, "B").value
    return domain


@pytest.fixture
def add(tasks):
    """Create open tasks in a domain, in order; returns them."""

    def _add(domain, *names, **fields):
        created = []
        for name in names:
            task, _ = tasks.create_task(USER, domain.id, name, **fields).value
            created.append(task)
        return created

    return _add
