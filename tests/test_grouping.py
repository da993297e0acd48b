"""Tests for the domain-grouped presentation order."""

from domo.domain.area import Domain
from domo.domain.task import group_and_order

from helpers import USER, make_task, titles


def domain(name, order, active=True):
    return Domain(id=name, user_id=USER, name=name, sort_order=order, is_active=active)


class TestGroupAndOrder:
    def test_buckets_follow_domain_sort_order(self):
        domains = [domain("late", 2), domain("early", 0), domain("middle", 1)]
        tasks = [
            make_task("L", "late"),
            make_task("E2", "early", position=1),
            make_task("M", "middle"),
            make_task("E1", "early", position=0),
        ]
        assert titles(group_and_order(tasks, domains)) == ["E1", "E2", "M", "L"]

    def test_mode_applies_inside_each_bucket(self):
        domains = [domain("a", 0), domain("b", 1)]
        tasks = [
            make_task("a-low", "a", position=0, priority=1),
            make_task("b-low", "b", position=0, priority=1),
            make_task("a-high", "a", position=1, priority=3),
            make_task("b-high", "b", position=1, priority=3),
        ]
        assert titles(group_and_order(tasks, domains, "priority")) == ["a-high", "a-low", "b-high", "b-low"]
        assert titles(group_and_order(tasks, domains, "manual")) == ["a-low", "a-high", "b-low", "b-high"]

    def test_inactive_and_unknown_domains_are_dropped(self):
        domains = [domain("on", 0), domain("off", 1, active=False)]
        tasks = [make_task("kept", "on"), make_task("hidden", "off"), make_task("orphan", "gone")]
        assert titles(group_and_order(tasks, domains)) == ["kept"]

    def test_empty_inputs(self):
        assert group_and_order([], []) == []
        assert group_and_order([make_task("x")], []) == []

    def test_domain_without_tasks_contributes_nothing(self):
        domains = [domain("empty", 0), domain("full", 1)]
        assert titles(group_and_order([make_task("t", "full")], domains)) == ["t"]
