# taskboard/kanban/moves.py
from __future__ import annotations

from dataclasses import replace
from typing import Any, Sequence

from taskboard.kanban.errors import InvalidColumnReference, InvalidTaskReference, WipLimitExceeded
from taskboard.kanban.models import MovePlan, TaskCard, TaskUpdate
from taskboard.kanban.ordering import column_tasks, reorder
from taskboard.kanban.policy import ColumnStatusPolicy


def plan_move(
    tasks: Sequence[TaskCard],
    moved_task_id: Any,
    destination_column_id: Any,
    destination_index: int,
    policy: ColumnStatusPolicy,
) -> MovePlan:
    """Turn a drag intent into the full set of task updates.

    The moved task's status follows its new column whenever that column is
    mapped. Nothing is written; the caller applies plan.updates as one unit.
    """
    if not policy.has_column(destination_column_id):
        raise InvalidColumnReference(destination_column_id)

    before_by_id = {t.id: t for t in tasks}
    if moved_task_id not in before_by_id:
        raise InvalidTaskReference(moved_task_id)
    before = before_by_id[moved_task_id]

    changed = reorder(tasks, moved_task_id, destination_column_id, destination_index)

    crossed = before.column_id != destination_column_id
    destination_count = len(column_tasks(tasks, destination_column_id, exclude=moved_task_id)) + 1
    wip_exceeded = policy.is_wip_exceeded(destination_column_id, destination_count)
    # a reorder inside one column never adds load, so only arrivals are rejected
    if wip_exceeded and crossed and policy.enforce_wip:
        raise WipLimitExceeded(
            destination_column_id,
            policy.column(destination_column_id).wip_limit,
            destination_count,
        )

    after = before
    updates = []
    for task in changed:
        if task.id == moved_task_id:
            if crossed:
                status = policy.derive_status(destination_column_id)
                if status is not None:
                    task = replace(task, status=status)
            after = task
        update = TaskUpdate.between(before_by_id[task.id], task)
        if not update.is_empty():
            updates.append(update)

    return MovePlan(
        before=before,
        after=after,
        updates=updates,
        destination_count=destination_count,
        wip_exceeded=wip_exceeded,
    )
