# taskboard/kanban/models.py
"""
Plain records the kanban engine works on.

Nothing here knows about the database: the task store converts ORM rows into
TaskCard values and applies TaskUpdate values back.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Tuple


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


@dataclass(frozen=True)
class TaskCard:
    id: Any
    column_id: Any
    status: TaskStatus
    sort_order: int
    created_by_id: Any
    assignee_id: Any = None

    # payload, never touched by ordering
    title: str = ""
    description: Optional[str] = None
    priority: str = "medium"
    due_date: Optional[datetime] = None


# Fields compared when building activity-log change sets.
TRACKED_FIELDS: Tuple[str, ...] = (
    "column_id",
    "status",
    "sort_order",
    "assignee_id",
    "title",
    "description",
    "priority",
    "due_date",
)


@dataclass(frozen=True)
class ColumnConfig:
    id: Any
    status: Optional[TaskStatus] = None
    wip_limit: Optional[int] = None
    sort_order: int = 0
    name: str = ""


@dataclass(frozen=True)
class TaskUpdate:
    """Partial update for one task. None means "leave as is"."""

    id: Any
    column_id: Any = None
    status: Optional[TaskStatus] = None
    sort_order: Optional[int] = None

    @classmethod
    def between(cls, before: TaskCard, after: TaskCard) -> "TaskUpdate":
        return cls(
            id=after.id,
            column_id=after.column_id if after.column_id != before.column_id else None,
            status=after.status if after.status != before.status else None,
            sort_order=after.sort_order if after.sort_order != before.sort_order else None,
        )

    def is_empty(self) -> bool:
        return self.column_id is None and self.status is None and self.sort_order is None

    def as_dict(self) -> dict:
        data = {"id": self.id}
        if self.column_id is not None:
            data["column_id"] = self.column_id
        if self.status is not None:
            data["status"] = self.status.value
        if self.sort_order is not None:
            data["sort_order"] = self.sort_order
        return data


@dataclass(frozen=True)
class MovePlan:
    before: TaskCard
    after: TaskCard
    updates: List[TaskUpdate] = field(default_factory=list)
    destination_count: int = 0
    wip_exceeded: bool = False

    @property
    def is_noop(self) -> bool:
        return not self.updates

    @property
    def crossed_columns(self) -> bool:
        return self.before.column_id != self.after.column_id
