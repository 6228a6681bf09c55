# taskboard/kanban/policy.py
"""
Column/status policy: which status a column implies, and its WIP limit.

Boards differ only in data. The two layouts the product ships are kept here as
presets; anything else is built from the board's column rows.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from taskboard.kanban.errors import InvalidColumnReference
from taskboard.kanban.models import ColumnConfig, TaskStatus


# ---------------- PRESETS ----------------
# name, mapped status, wip limit
STANDARD_COLUMNS = [
    ("To Do", TaskStatus.TODO, None),
    ("In Progress", TaskStatus.IN_PROGRESS, 3),
    ("Review", TaskStatus.REVIEW, 2),
    ("Done", TaskStatus.DONE, None),
]

TASKS_COLUMNS = [
    ("Active Tasks", TaskStatus.TODO, None),
    ("Processing Tasks", TaskStatus.IN_PROGRESS, 5),
    ("Completed Tasks", TaskStatus.DONE, None),
]

BOARD_TEMPLATES = {
    "standard": STANDARD_COLUMNS,
    "tasks": TASKS_COLUMNS,
}


class ColumnStatusPolicy:
    def __init__(self, columns: Iterable[ColumnConfig], enforce_wip: bool = False):
        self._columns: Dict[Any, ColumnConfig] = {c.id: c for c in columns}
        self.enforce_wip = enforce_wip

    @classmethod
    def from_template(cls, template: str, enforce_wip: bool = False) -> "ColumnStatusPolicy":
        """Policy keyed by column name, handy for boards that are not persisted."""
        try:
            rows = BOARD_TEMPLATES[template]
        except KeyError:
            raise ValueError(f"Unknown board template: {template}")
        return cls(
            [
                ColumnConfig(id=name, name=name, status=status, wip_limit=wip, sort_order=i)
                for i, (name, status, wip) in enumerate(rows)
            ],
            enforce_wip=enforce_wip,
        )

    @property
    def columns(self) -> List[ColumnConfig]:
        return sorted(self._columns.values(), key=lambda c: c.sort_order)

    def has_column(self, column_id: Any) -> bool:
        return column_id in self._columns

    def column(self, column_id: Any) -> ColumnConfig:
        try:
            return self._columns[column_id]
        except KeyError:
            raise InvalidColumnReference(column_id)

    def derive_status(self, column_id: Any) -> Optional[TaskStatus]:
        """Mapped status of a column; None when the column is status-neutral."""
        return self.column(column_id).status

    def is_wip_exceeded(self, column_id: Any, count_after_move: int) -> bool:
        limit = self.column(column_id).wip_limit
        return limit is not None and count_after_move > limit
