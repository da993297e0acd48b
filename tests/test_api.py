"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from domo.config import AppConfig
from domo.domain.area import SEED_DOMAINS
from domo.infrastructure.storage import MemoryStore
from domo.interfaces.api import create_app

from helpers import USER


@pytest.fixture
def client(tmp_path):
    config = AppConfig(user_id=USER, data_dir=tmp_path, seed_domains=["A", "B"])
    with TestClient(create_app(store=MemoryStore(), config=config)) as client:
        yield client


@pytest.fixture
def area_ids(client):
    return {d["name"]: d["id"] for d in client.get("/api/domains").json()}


def create(client, domain_id, *titles):
    return [client.post("/api/tasks", json={"domainId": domain_id, "title": t}).json() for t in titles]


def order(client, domain_id):
    """(title, position) of the domain's open tasks in list order."""
    tasks = client.get("/api/tasks", params={"filter": "open"}).json()
    return [(t["title"], t["domain_sort_order"]) for t in tasks if t["domain_id"] == domain_id]


class TestStartup:
    def test_root(self, client):
        assert client.get("/").json()["name"] == "Domo"

    def test_configured_user_is_seeded(self, client):
        domains = client.get("/api/domains").json()
        assert [d["name"] for d in domains] == ["A", "B"]

    def test_default_seed_list(self, tmp_path):
        config = AppConfig(user_id=USER, data_dir=tmp_path)
        with TestClient(create_app(store=MemoryStore(), config=config)) as client:
            names = [d["name"] for d in client.get("/api/domains").json()]
        assert names == list(SEED_DOMAINS)


class TestTasks:
    def test_create_appends(self, client, area_ids):
        created = create(client, area_ids["A"], "T1", "T2")
        assert [t["domain_sort_order"] for t in created] == [0, 1]

    def test_create_validation_error(self, client, area_ids):
        response = client.post("/api/tasks", json={"domainId": area_ids["A"], "title": "x", "priority": 7})
        assert response.status_code == 400

    def test_create_in_unknown_domain(self, client):
        response = client.post("/api/tasks", json={"domainId": "ghost", "title": "x"})
        assert response.status_code == 404

    def test_get_and_patch(self, client, area_ids):
        (t1,) = create(client, area_ids["A"], "T1")
        response = client.patch(f"/api/tasks/{t1['id']}", json={"title": "Renamed", "dueDate": "2026-03-01"})
        assert response.status_code == 200
        fetched = client.get(f"/api/tasks/{t1['id']}").json()
        assert fetched["title"] == "Renamed"
        assert fetched["due_date"] == "2026-03-01"

    def test_patch_domain_moves_task(self, client, area_ids):
        a, b = area_ids["A"], area_ids["B"]
        t1, _, _ = create(client, a, "T1", "T2", "T3")
        response = client.patch(f"/api/tasks/{t1['id']}", json={"domainId": b})
        assert response.json()["domain_id"] == b
        assert order(client, a) == [("T2", 0), ("T3", 1)]
        assert order(client, b) == [("T1", 0)]

    def test_unknown_task(self, client):
        assert client.get("/api/tasks/ghost").status_code == 404

    def test_lifecycle(self, client, area_ids):
        t1, t2, t3 = create(client, area_ids["A"], "T1", "T2", "T3")
        assert client.post(f"/api/tasks/{t2['id']}/archive").status_code == 200
        assert order(client, area_ids["A"]) == [("T1", 0), ("T3", 2)]

        restored = client.post(f"/api/tasks/{t2['id']}/restore").json()
        assert restored["domain_sort_order"] == 3

        assert client.post(f"/api/tasks/{t1['id']}/complete").json()["status"] == "completed"
        assert client.post(f"/api/tasks/{t1['id']}/complete").status_code == 409
        assert client.post(f"/api/tasks/{t1['id']}/reopen").json()["status"] == "open"

    def test_filter_and_sort_params(self, client, area_ids):
        low, high = create(client, area_ids["A"], "Low", "High")
        client.patch(f"/api/tasks/{high['id']}", json={"priority": 3})
        client.patch(f"/api/tasks/{low['id']}", json={"priority": 1})
        client.post(f"/api/tasks/{low['id']}/complete")

        by_priority = client.get("/api/tasks", params={"sort": "priority"}).json()
        assert [t["title"] for t in by_priority] == ["High", "Low"]
        completed = client.get("/api/tasks", params={"filter": "completed"}).json()
        assert [t["title"] for t in completed] == ["Low"]
        fallback = client.get("/api/tasks", params={"filter": "nonsense", "sort": "nonsense"}).json()
        assert [t["title"] for t in fallback] == ["Low", "High"]


class TestReorderEndpoint:
    def test_single_move_within_domain(self, client, area_ids):
        a = area_ids["A"]
        _, _, t3 = create(client, a, "T1", "T2", "T3")
        response = client.post(f"/api/domains/{a}/tasks/reorder", json={"taskId": t3["id"], "newIndex": 0})
        assert response.status_code == 200
        assert response.json()["domain_sort_order"] == 0
        assert order(client, a) == [("T3", 0), ("T1", 1), ("T2", 2)]

    def test_single_move_from_other_domain(self, client, area_ids):
        a, b = area_ids["A"], area_ids["B"]
        t1, _ = create(client, a, "T1", "T2")
        create(client, b, "T3")
        response = client.post(f"/api/domains/{b}/tasks/reorder", json={"taskId": t1["id"], "newIndex": 1})
        assert response.json()["domain_id"] == b
        assert order(client, a) == [("T2", 0)]
        assert order(client, b) == [("T3", 0), ("T1", 1)]

    def test_full_ordering(self, client, area_ids):
        a = area_ids["A"]
        t1, t2, t3 = create(client, a, "T1", "T2", "T3")
        response = client.post(
            f"/api/domains/{a}/tasks/reorder", json={"ordered_task_ids": [t2["id"], t3["id"], t1["id"]]}
        )
        body = response.json()
        assert body["success"] is True
        assert body["task_ids"] == [t2["id"], t3["id"], t1["id"]]
        assert order(client, a) == [("T2", 0), ("T3", 1), ("T1", 2)]

    def test_missing_intent(self, client, area_ids):
        response = client.post(f"/api/domains/{area_ids['A']}/tasks/reorder", json={})
        assert response.status_code == 400


class TestMoveEndpoint:
    def test_move(self, client, area_ids):
        (t1,) = create(client, area_ids["A"], "T1")
        response = client.post(f"/api/tasks/{t1['id']}/move", json={"newDomainId": area_ids["B"], "newIndex": 9})
        assert response.status_code == 200
        assert response.json()["domain_sort_order"] == 0

    def test_completed_task_conflict(self, client, area_ids):
        (t1,) = create(client, area_ids["A"], "T1")
        client.post(f"/api/tasks/{t1['id']}/complete")
        response = client.post(f"/api/tasks/{t1['id']}/move", json={"newDomainId": area_ids["B"]})
        assert response.status_code == 409

    def test_unknown_domain(self, client, area_ids):
        (t1,) = create(client, area_ids["A"], "T1")
        response = client.post(f"/api/tasks/{t1['id']}/move", json={"newDomainId": "ghost"})
        assert response.status_code == 404


class TestDomains:
    def test_create_and_reorder(self, client, area_ids):
        c = client.post("/api/domains", json={"name": "C"}).json()
        assert c["sort_order"] == 2
        body = client.post("/api/domains/reorder", json={"ordered_domain_ids": [c["id"]]}).json()
        assert body["domain_ids"] == [c["id"], area_ids["A"], area_ids["B"]]
        assert [d["name"] for d in client.get("/api/domains").json()] == ["C", "A", "B"]

    def test_patch_renames_and_toggles(self, client, area_ids):
        response = client.patch(f"/api/domains/{area_ids['A']}", json={"name": "Home", "isActive": False})
        assert response.json()["name"] == "Home"
        assert response.json()["is_active"] is False
        active = client.get("/api/domains", params={"include_inactive": False}).json()
        assert [d["name"] for d in active] == ["B"]

    def test_deactivate_with_reassign(self, client, area_ids):
        a, b = area_ids["A"], area_ids["B"]
        create(client, a, "T1", "T2")
        response = client.post(f"/api/domains/{a}/deactivate", json={"reassignTo": b})
        assert response.status_code == 200
        assert order(client, b) == [("T1", 0), ("T2", 1)]

    def test_deactivate_onto_itself(self, client, area_ids):
        a = area_ids["A"]
        response = client.post(f"/api/domains/{a}/deactivate", json={"reassignTo": a})
        assert response.status_code == 400


class TestUserScoping:
    def test_header_selects_user(self, client, area_ids):
        headers = {"X-User-Id": "guest"}
        assert client.get("/api/domains", headers=headers).json() == []
        client.post("/api/domains", json={"name": "Guest area"}, headers=headers)
        assert [d["name"] for d in client.get("/api/domains", headers=headers).json()] == ["Guest area"]
        assert len(client.get("/api/domains").json()) == 2

    def test_tasks_of_other_users_are_not_found(self, client, area_ids):
        (t1,) = create(client, area_ids["A"], "T1")
        assert client.get(f"/api/tasks/{t1['id']}", headers={"X-User-Id": "guest"}).status_code == 404
