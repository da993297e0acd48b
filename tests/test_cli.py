"""Tests for the Typer CLI."""

import pytest
from typer.testing import CliRunner

from domo import __version__
from domo.infrastructure.storage import JsonStore
from domo.interfaces.cli import app

from helpers import USER, layout

runner = CliRunner()


@pytest.fixture
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("DOMO_HOME", str(tmp_path))
    monkeypatch.setenv("DOMO_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("DOMO_USER", USER)
    return tmp_path


@pytest.fixture
def store(env):
    return JsonStore(env / "data")


def invoke(*args):
    return runner.invoke(app, list(args))


def domain_id(store, name):
    return next(d.id for d in store.list_domains(USER).value if d.name == name)


class TestCli:
    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_init_seeds_once(self, store):
        first = invoke("init")
        assert first.exit_code == 0
        assert "9 domains" in first.output
        invoke("init")
        assert len(store.list_domains(USER).value) == 9

    def test_domain_list(self, store):
        invoke("init")
        result = invoke("domain", "list")
        assert result.exit_code == 0
        assert "Body" in result.output
        assert "Manage" in result.output

    def test_add_and_list_tasks(self, store):
        invoke("init")
        assert invoke("task", "add", "Stretch", "--domain", "body", "--priority", "2").exit_code == 0
        assert invoke("task", "add", "Walk", "-d", "Body", "--due", "2026-02-01").exit_code == 0

        result = invoke("task", "list", "--filter", "open")
        assert result.exit_code == 0
        assert "## Body" in result.output
        assert result.output.index("Stretch") < result.output.index("Walk")
        assert "due 2026-02-01" in result.output

    def test_reorder_and_move(self, store):
        invoke("init")
        for title in ("T1", "T2", "T3"):
            invoke("task", "add", title, "--domain", "Body")
        body, mind = domain_id(store, "Body"), domain_id(store, "Mind")
        t3 = next(t for t in store.list_tasks(USER).value if t.title == "T3")

        assert invoke("task", "reorder", t3.id[:8], "0").exit_code == 0
        assert layout(store, body) == [("T3", 0), ("T1", 1), ("T2", 2)]

        result = invoke("task", "move", t3.id, "mind")
        assert result.exit_code == 0
        assert layout(store, body) == [("T1", 0), ("T2", 1)]
        assert layout(store, mind) == [("T3", 0)]

    def test_move_completed_task_fails(self, store):
        invoke("init")
        invoke("task", "add", "T1", "--domain", "Body")
        (t1,) = store.list_tasks(USER).value
        invoke("task", "done", t1.id)
        assert invoke("task", "move", t1.id, "Mind").exit_code == 1

    def test_unknown_domain_fails(self, store):
        invoke("init")
        assert invoke("task", "add", "Lost", "--domain", "Nowhere").exit_code == 1

    def test_deactivate_with_reassign(self, store):
        invoke("init")
        invoke("task", "add", "T1", "--domain", "Body")
        result = invoke("domain", "deactivate", "Body", "--reassign-to", "Mind")
        assert result.exit_code == 0
        assert "1 open tasks reassigned" in result.output
        assert layout(store, domain_id(store, "Mind")) == [("T1", 0)]

    def test_user_option_scopes_data(self, store):
        invoke("init", "--user", "guest")
        assert store.list_domains(USER).value == []
        assert len(store.list_domains("guest").value) == 9
