"""
Task persistence for the kanban engine.

Reads hand out TaskCard values; writes take TaskUpdate values. apply_delta is
the only write path used by moves and commits everything pending in the
session as one transaction.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.kanban.errors import InvalidTaskReference
from taskboard.kanban.models import TaskCard, TaskUpdate
from taskboard.models.task import Task

logger = logging.getLogger("taskboard.task")


class TaskStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, task_id: int) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def list_tasks_by_column(self, column_id: int) -> List[TaskCard]:
        rows = (
            self.db.query(Task)
            .filter(Task.column_id == column_id)
            .order_by(Task.sort_order.asc(), Task.id.asc())
            .all()
        )
        return [row.to_card() for row in rows]

    def list_tasks_by_board(self, board_id: int, for_update: bool = False) -> List[TaskCard]:
        q = (
            self.db.query(Task)
            .filter(Task.board_id == board_id)
            .order_by(Task.sort_order.asc(), Task.id.asc())
        )
        if for_update:
            # row locks on backends that have them; SQLite ignores this
            q = q.with_for_update()
        return [row.to_card() for row in q.all()]

    def next_sort_order(self, column_id: int, for_update: bool = False) -> int:
        """Append position for a new task: the current size of the column."""
        if for_update:
            # lock the column so concurrent creates queue up behind this one
            ids = (
                self.db.query(Task.id)
                .filter(Task.column_id == column_id)
                .with_for_update()
                .all()
            )
            return len(ids)
        count = self.db.query(func.count(Task.id)).filter(Task.column_id == column_id).scalar()
        return int(count or 0)

    def apply_delta(self, updates: Iterable[TaskUpdate]) -> List[Task]:
        """Write all partial updates in one commit, or none of them.

        Values are absolute, so the same delta can be applied again safely.
        """
        updates = list(updates)
        try:
            rows = {}
            if updates:
                ids = [u.id for u in updates]
                rows = {t.id: t for t in self.db.query(Task).filter(Task.id.in_(ids)).all()}

            for update in updates:
                task = rows.get(update.id)
                if task is None:
                    raise InvalidTaskReference(update.id)
                if update.column_id is not None:
                    task.column_id = update.column_id
                if update.status is not None:
                    task.status = update.status.value
                if update.sort_order is not None:
                    task.sort_order = update.sort_order

            self.db.commit()
        except (SQLAlchemyError, InvalidTaskReference):
            self.db.rollback()
            logger.exception("task_delta_failed", extra={"update_count": len(updates)})
            raise

        return [rows[u.id] for u in updates]
