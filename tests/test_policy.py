"""
Tests for the column/status policy and move planning.
"""
import pytest

from taskboard.kanban.errors import InvalidColumnReference, InvalidTaskReference, WipLimitExceeded
from taskboard.kanban.models import ColumnConfig, TaskCard, TaskStatus, TaskUpdate
from taskboard.kanban.moves import plan_move
from taskboard.kanban.policy import ColumnStatusPolicy


def card(task_id, column, order, status):
    return TaskCard(id=task_id, column_id=column, status=status, sort_order=order, created_by_id="u1")


@pytest.fixture
def standard():
    return ColumnStatusPolicy.from_template("standard")


@pytest.fixture
def three_lane():
    return ColumnStatusPolicy.from_template("tasks")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Policy
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_standard_board_mapping(standard):
    assert standard.derive_status("To Do") == TaskStatus.TODO
    assert standard.derive_status("In Progress") == TaskStatus.IN_PROGRESS
    assert standard.derive_status("Review") == TaskStatus.REVIEW
    assert standard.derive_status("Done") == TaskStatus.DONE


def test_three_lane_board_mapping(three_lane):
    assert [c.id for c in three_lane.columns] == ["Active Tasks", "Processing Tasks", "Completed Tasks"]
    assert three_lane.derive_status("Active Tasks") == TaskStatus.TODO
    assert three_lane.derive_status("Processing Tasks") == TaskStatus.IN_PROGRESS
    assert three_lane.derive_status("Completed Tasks") == TaskStatus.DONE


def test_unmapped_column_is_status_neutral():
    policy = ColumnStatusPolicy([ColumnConfig(id="ideas"), ColumnConfig(id="done", status=TaskStatus.DONE)])

    assert policy.derive_status("ideas") is None


def test_unknown_column_raises(standard):
    with pytest.raises(InvalidColumnReference):
        standard.derive_status("Backlog")


def test_unknown_template_raises():
    with pytest.raises(ValueError):
        ColumnStatusPolicy.from_template("scrum")


def test_wip_limit_flag(standard):
    # In Progress has a limit of 3
    assert not standard.is_wip_exceeded("In Progress", 3)
    assert standard.is_wip_exceeded("In Progress", 4)
    # no limit, never exceeded
    assert not standard.is_wip_exceeded("To Do", 1000)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# plan_move
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_cross_column_move_follows_column_status(standard):
    tasks = [
        card("t1", "To Do", 0, TaskStatus.TODO),
        card("t2", "To Do", 1, TaskStatus.TODO),
        card("t3", "Review", 0, TaskStatus.REVIEW),
    ]

    plan = plan_move(tasks, "t1", "Review", 1, standard)

    assert plan.after.status == TaskStatus.REVIEW
    assert plan.after.column_id == "Review"
    assert plan.updates == [
        TaskUpdate(id="t1", column_id="Review", status=TaskStatus.REVIEW, sort_order=1),
        TaskUpdate(id="t2", sort_order=0),
    ]


def test_status_follows_on_every_cross_column_move(standard):
    tasks = [
        card("t1", "To Do", 0, TaskStatus.TODO),
        card("t2", "In Progress", 0, TaskStatus.IN_PROGRESS),
        card("t3", "Review", 0, TaskStatus.REVIEW),
        card("t4", "Done", 0, TaskStatus.DONE),
    ]

    for task in tasks:
        for column in standard.columns:
            if column.id == task.column_id:
                continue
            plan = plan_move(tasks, task.id, column.id, 0, standard)
            assert plan.after.status == standard.derive_status(column.id)


def test_status_already_matching_is_not_rewritten(standard):
    # manual edit left the task "done" in To Do
    tasks = [card("t1", "To Do", 0, TaskStatus.DONE)]

    plan = plan_move(tasks, "t1", "Done", 0, standard)

    assert plan.updates == [TaskUpdate(id="t1", column_id="Done", sort_order=None)]
    assert plan.after.status == TaskStatus.DONE


def test_same_column_move_keeps_status(standard):
    # even a diverged status is left alone on a pure reorder
    tasks = [card("t1", "To Do", 0, TaskStatus.REVIEW), card("t2", "To Do", 1, TaskStatus.TODO)]

    plan = plan_move(tasks, "t1", "To Do", 1, standard)

    assert plan.after.status == TaskStatus.REVIEW
    assert all(u.status is None for u in plan.updates)


def test_move_into_unmapped_column_keeps_status():
    policy = ColumnStatusPolicy(
        [ColumnConfig(id="todo", status=TaskStatus.TODO), ColumnConfig(id="parking")]
    )
    tasks = [card("t1", "todo", 0, TaskStatus.TODO)]

    plan = plan_move(tasks, "t1", "parking", 0, policy)

    assert plan.after.status == TaskStatus.TODO
    assert plan.updates == [TaskUpdate(id="t1", column_id="parking")]


def test_noop_move_yields_empty_plan(standard):
    tasks = [card("t1", "To Do", 0, TaskStatus.TODO), card("t2", "To Do", 1, TaskStatus.TODO)]

    plan = plan_move(tasks, "t2", "To Do", 1, standard)

    assert plan.is_noop
    assert plan.before == plan.after


def test_plan_rejects_unknown_column(standard):
    tasks = [card("t1", "To Do", 0, TaskStatus.TODO)]

    with pytest.raises(InvalidColumnReference):
        plan_move(tasks, "t1", "Backlog", 0, standard)


def test_plan_rejects_unknown_task(standard):
    with pytest.raises(InvalidTaskReference):
        plan_move([], "t1", "To Do", 0, standard)


def test_wip_breach_is_flagged_not_blocked(standard):
    tasks = [card(f"r{i}", "Review", i, TaskStatus.REVIEW) for i in range(2)]
    tasks.append(card("t1", "To Do", 0, TaskStatus.TODO))

    plan = plan_move(tasks, "t1", "Review", 0, standard)

    assert plan.wip_exceeded
    assert plan.destination_count == 3
    assert not plan.is_noop


def test_wip_breach_blocked_when_enforced():
    policy = ColumnStatusPolicy.from_template("standard", enforce_wip=True)
    tasks = [card(f"r{i}", "Review", i, TaskStatus.REVIEW) for i in range(2)]
    tasks.append(card("t1", "To Do", 0, TaskStatus.TODO))

    with pytest.raises(WipLimitExceeded) as exc_info:
        plan_move(tasks, "t1", "Review", 0, policy)
    assert exc_info.value.wip_limit == 2
    assert exc_info.value.count == 3


def test_enforced_wip_still_allows_reorder_inside_full_column():
    policy = ColumnStatusPolicy.from_template("standard", enforce_wip=True)
    tasks = [card(f"r{i}", "Review", i, TaskStatus.REVIEW) for i in range(3)]

    plan = plan_move(tasks, "r0", "Review", 2, policy)

    assert plan.wip_exceeded
    assert [u.id for u in plan.updates] == ["r0", "r1", "r2"]
