# taskboard/kanban/ordering.py
"""
Ordering engine for kanban columns.

A move is computed as a pure transform: the caller hands in the tasks of the
board (or at least of the origin and destination columns), the engine hands
back copies of the tasks whose column or position changed. Applying that delta
leaves every touched column numbered 0..len-1.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Sequence

from taskboard.kanban.errors import InvalidTaskReference
from taskboard.kanban.models import TaskCard


def column_tasks(tasks: Sequence[TaskCard], column_id: Any, exclude: Any = None) -> List[TaskCard]:
    """Tasks of one column in display order.

    Ties on sort_order keep input order (sorted() is stable).
    """
    members = [t for t in tasks if t.column_id == column_id and t.id != exclude]
    return sorted(members, key=lambda t: t.sort_order)


def _renumbered(ordered: Iterable[TaskCard], column_id: Any) -> List[TaskCard]:
    return [
        replace(task, column_id=column_id, sort_order=position)
        for position, task in enumerate(ordered)
    ]


def _find(tasks: Sequence[TaskCard], task_id: Any) -> TaskCard:
    for task in tasks:
        if task.id == task_id:
            return task
    raise InvalidTaskReference(task_id)


def clamp_index(index: int, size: int) -> int:
    return max(0, min(index, size))


def reorder(
    tasks: Sequence[TaskCard],
    moved_task_id: Any,
    destination_column_id: Any,
    destination_index: int,
) -> List[TaskCard]:
    """Move one task and return the changed tasks, in input order.

    Raises InvalidTaskReference when moved_task_id is not in tasks.
    """
    moved = _find(tasks, moved_task_id)
    origin_column_id = moved.column_id

    destination = column_tasks(tasks, destination_column_id, exclude=moved.id)
    index = clamp_index(destination_index, len(destination))

    if origin_column_id == destination_column_id:
        current = [t.id for t in column_tasks(tasks, origin_column_id)]
        if current.index(moved.id) == index:
            return []

    destination.insert(index, moved)
    new_state: Dict[Any, TaskCard] = {
        t.id: t for t in _renumbered(destination, destination_column_id)
    }

    if origin_column_id != destination_column_id:
        origin = column_tasks(tasks, origin_column_id, exclude=moved.id)
        new_state.update({t.id: t for t in _renumbered(origin, origin_column_id)})

    return [
        new_state[t.id]
        for t in tasks
        if t.id in new_state and new_state[t.id] != t
    ]


def renumber(tasks: Sequence[TaskCard]) -> List[TaskCard]:
    """Close gaps and duplicates in each column; return only changed copies."""
    changed: List[TaskCard] = []
    seen = []
    for task in tasks:
        if task.column_id in seen:
            continue
        seen.append(task.column_id)
        ordered = column_tasks(tasks, task.column_id)
        changed.extend(
            new for new, old in zip(_renumbered(ordered, task.column_id), ordered) if new != old
        )
    return changed


def apply(tasks: Sequence[TaskCard], changed: Iterable[TaskCard]) -> List[TaskCard]:
    """Overlay changed copies onto tasks, keyed by id."""
    by_id = {t.id: t for t in changed}
    return [by_id.get(t.id, t) for t in tasks]
