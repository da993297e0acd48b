"""Tests for the position allocator."""

from domo.domain.task import (
    PositionWrite,
    is_dense,
    next_position,
    plan_insert,
    plan_reorder,
    position_writes,
    renumber,
)

from helpers import make_task, titles


def _row(*names):
    return [make_task(name, position=i) for i, name in enumerate(names)]


class TestNextPosition:
    def test_empty_domain_starts_at_zero(self):
        assert next_position([]) == 0

    def test_max_plus_one(self):
        tasks = [make_task("a", position=0), make_task("b", position=4)]
        assert next_position(tasks) == 5


class TestRenumber:
    def test_positions_follow_given_order(self):
        assert renumber(["c", "a", "b"]) == [("c", 0), ("a", 1), ("b", 2)]

    def test_empty(self):
        assert renumber([]) == []


class TestPlanReorder:
    def test_move_last_to_front(self):
        row = _row("T1", "T2", "T3")
        assert titles(plan_reorder(row, row[2].id, 0)) == ["T3", "T1", "T2"]

    def test_index_is_read_after_removal(self):
        row = _row("a", "b", "c", "d")
        # moving "a" to index 2 of [b, c, d] puts it after "c"
        assert titles(plan_reorder(row, row[0].id, 2)) == ["b", "c", "a", "d"]

    def test_index_clamped(self):
        row = _row("a", "b", "c")
        assert titles(plan_reorder(row, row[0].id, 99)) == ["b", "c", "a"]
        assert titles(plan_reorder(row, row[2].id, -5)) == ["c", "a", "b"]

    def test_unknown_task(self):
        assert plan_reorder(_row("a"), "nope", 0) is None


class TestPlanInsert:
    def test_insert_in_middle(self):
        arranged, landed = plan_insert(_row("a", "b"), make_task("x"), 1)
        assert titles(arranged) == ["a", "x", "b"]
        assert landed == 1

    def test_insert_clamped_to_end(self):
        arranged, landed = plan_insert(_row("a"), make_task("x"), 10)
        assert titles(arranged) == ["a", "x"]
        assert landed == 1


class TestPositionWrites:
    def test_only_changed_positions_written_in_ascending_order(self):
        row = _row("a", "b", "c")
        arranged = [row[0], row[2], row[1]]
        writes = position_writes(arranged, "dom")
        assert writes == [
            PositionWrite(task_id=row[2].id, domain_id="dom", position=1),
            PositionWrite(task_id=row[1].id, domain_id="dom", position=2),
        ]

    def test_gaps_are_healed(self):
        tasks = [make_task("a", position=3), make_task("b", position=7)]
        writes = position_writes(tasks, "dom")
        assert [w.position for w in writes] == [0, 1]

    def test_domain_change_is_written_even_at_same_position(self):
        task = make_task("a", domain_id="old", position=0)
        assert position_writes([task], "new") == [PositionWrite(task_id=task.id, domain_id="new", position=0)]

    def test_excluded_task_is_skipped(self):
        row = _row("a", "b")
        moved = make_task("x", domain_id="other", position=5)
        writes = position_writes([moved, *row], "dom", exclude=moved.id)
        assert [w.task_id for w in writes] == [row[0].id, row[1].id]
        assert [w.position for w in writes] == [1, 2]


class TestIsDense:
    def test_dense(self):
        assert is_dense(_row("a", "b", "c"))
        assert is_dense([])

    def test_gap_or_duplicate(self):
        assert not is_dense([make_task("a", position=0), make_task("b", position=2)])
        assert not is_dense([make_task("a", position=0), make_task("b", position=0)])
