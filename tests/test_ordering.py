"""
Tests for the ordering engine: reorder(), renumber(), apply().
"""
from dataclasses import replace

import pytest

from taskboard.kanban.errors import InvalidTaskReference
from taskboard.kanban.models import TaskCard, TaskStatus
from taskboard.kanban.ordering import apply, column_tasks, renumber, reorder


def card(task_id, column, order, status=TaskStatus.TODO):
    return TaskCard(id=task_id, column_id=column, status=status, sort_order=order, created_by_id="u1")


def layout(tasks, column):
    return [(t.id, t.sort_order) for t in column_tasks(tasks, column)]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Scenarios
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_cross_column_move_into_empty_column():
    tasks = [card("t1", "B", 0), card("t2", "B", 1), card("t3", "B", 2)]

    changed = reorder(tasks, "t2", "A", 0)
    result = apply(tasks, changed)

    assert layout(result, "A") == [("t2", 0)]
    assert layout(result, "B") == [("t1", 0), ("t3", 1)]
    # t1 keeps its place, so it is not part of the delta
    assert [t.id for t in changed] == ["t2", "t3"]


def test_same_column_reorder_to_end():
    tasks = [card("t1", "A", 0), card("t2", "A", 1), card("t3", "A", 2)]

    result = apply(tasks, reorder(tasks, "t1", "A", 2))

    assert layout(result, "A") == [("t2", 0), ("t3", 1), ("t1", 2)]


def test_same_column_reorder_to_front():
    tasks = [card("t1", "A", 0), card("t2", "A", 1), card("t3", "A", 2)]

    result = apply(tasks, reorder(tasks, "t3", "A", 0))

    assert layout(result, "A") == [("t3", 0), ("t1", 1), ("t2", 2)]


def test_move_to_current_position_is_noop():
    tasks = [card("t1", "A", 0), card("t2", "A", 1), card("t3", "A", 2)]

    assert reorder(tasks, "t2", "A", 1) == []


def test_noop_detected_after_clamping():
    tasks = [card("t1", "A", 0), card("t2", "A", 1)]

    # last task, index far past the end → still its own slot
    assert reorder(tasks, "t2", "A", 99) == []


def test_index_beyond_length_appends():
    tasks = [card("t1", "A", 0), card("t2", "A", 1), card("t3", "B", 0)]

    result = apply(tasks, reorder(tasks, "t3", "A", 42))

    assert layout(result, "A") == [("t1", 0), ("t2", 1), ("t3", 2)]
    assert layout(result, "B") == []


def test_negative_index_clamps_to_front():
    tasks = [card("t1", "A", 0), card("t2", "A", 1), card("t3", "B", 0)]

    result = apply(tasks, reorder(tasks, "t3", "A", -5))

    assert layout(result, "A") == [("t3", 0), ("t1", 1), ("t2", 2)]


def test_move_into_middle_of_other_column():
    tasks = [
        card("a1", "A", 0), card("a2", "A", 1), card("a3", "A", 2),
        card("b1", "B", 0), card("b2", "B", 1),
    ]

    result = apply(tasks, reorder(tasks, "a1", "B", 1))

    assert layout(result, "A") == [("a2", 0), ("a3", 1)]
    assert layout(result, "B") == [("b1", 0), ("a1", 1), ("b2", 2)]


def test_reorder_does_not_touch_status():
    tasks = [card("t1", "A", 0, status=TaskStatus.TODO), card("t2", "B", 0)]

    changed = reorder(tasks, "t1", "B", 0)

    assert all(t.status == TaskStatus.TODO for t in changed)


def test_input_is_not_mutated():
    tasks = [card("t1", "B", 0), card("t2", "B", 1)]
    snapshot = list(tasks)

    reorder(tasks, "t1", "A", 0)

    assert tasks == snapshot


def test_unknown_task_raises():
    tasks = [card("t1", "A", 0)]

    with pytest.raises(InvalidTaskReference):
        reorder(tasks, "nope", "A", 0)


def test_duplicate_ranks_resolve_by_input_order():
    # t2 and t3 share rank 1: the one listed first keeps the lower slot
    tasks = [card("t1", "A", 0), card("t3", "A", 1), card("t2", "A", 1), card("t4", "B", 0)]

    result = apply(tasks, reorder(tasks, "t4", "A", 3))

    assert layout(result, "A") == [("t1", 0), ("t3", 1), ("t2", 2), ("t4", 3)]


def test_gapped_origin_is_compacted():
    tasks = [card("t1", "A", 1), card("t2", "A", 5), card("t3", "A", 9)]

    result = apply(tasks, reorder(tasks, "t2", "B", 0))

    assert layout(result, "A") == [("t1", 0), ("t3", 1)]


def test_other_columns_are_left_alone():
    tasks = [card("t1", "A", 0), card("t2", "B", 0), card("t3", "C", 7)]

    changed = reorder(tasks, "t1", "B", 0)

    assert "t3" not in [t.id for t in changed]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Properties over every possible move on a small board
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

BOARD = [
    card("a1", "A", 0), card("a2", "A", 1), card("a3", "A", 2),
    card("b1", "B", 0),
    card("c1", "C", 0), card("c2", "C", 1),
]
MOVES = [
    (task.id, column, index)
    for task in BOARD
    for column in ("A", "B", "C", "D")
    for index in range(-1, 6)
]


@pytest.mark.parametrize("task_id,column,index", MOVES)
def test_every_move_keeps_columns_contiguous(task_id, column, index):
    result = apply(BOARD, reorder(BOARD, task_id, column, index))

    for col in ("A", "B", "C", "D"):
        orders = [t.sort_order for t in column_tasks(result, col)]
        assert orders == list(range(len(orders)))
    assert len(result) == len(BOARD)


@pytest.mark.parametrize("task_id,column,index", MOVES)
def test_every_move_preserves_relative_order_of_others(task_id, column, index):
    result = apply(BOARD, reorder(BOARD, task_id, column, index))

    for col in ("A", "B", "C", "D"):
        before = [t.id for t in column_tasks(BOARD, col) if t.id != task_id]
        after = [t.id for t in column_tasks(result, col) if t.id != task_id]
        assert before == after


@pytest.mark.parametrize("task_id,column,index", MOVES)
def test_every_move_places_task_at_clamped_index(task_id, column, index):
    result = apply(BOARD, reorder(BOARD, task_id, column, index))

    others = len([t for t in BOARD if t.column_id == column and t.id != task_id])
    expected = max(0, min(index, others))
    ids = [t.id for t in column_tasks(result, column)]
    assert ids.index(task_id) == expected


@pytest.mark.parametrize("task_id,column,index", MOVES)
def test_delta_is_reapplicable(task_id, column, index):
    changed = reorder(BOARD, task_id, column, index)

    once = apply(BOARD, changed)
    assert apply(once, changed) == once


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# renumber()
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_renumber_closes_gaps_per_column():
    tasks = [card("t1", "A", 0), card("t3", "A", 2), card("t4", "B", 3)]

    changed = renumber(tasks)

    assert changed == [replace(tasks[1], sort_order=1), replace(tasks[2], sort_order=0)]


def test_renumber_contiguous_column_is_empty_delta():
    tasks = [card("t1", "A", 0), card("t2", "A", 1)]

    assert renumber(tasks) == []
