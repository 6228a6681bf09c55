# taskboard/models/task.py

from __future__ import annotations

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from taskboard.database import Base
from taskboard.kanban.models import TaskCard, TaskStatus


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_column_order", "column_id", "sort_order"),)

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(String, default=TaskStatus.TODO.value, nullable=False)  # todo / in_progress / review / done
    priority = Column(String, default="medium", nullable=False)              # low / medium / high / urgent

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    board_id = Column(Integer, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    column_id = Column(Integer, ForeignKey("board_columns.id"), nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    assignee_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    due_date = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_card(self) -> TaskCard:
        return TaskCard(
            id=self.id,
            column_id=self.column_id,
            status=TaskStatus(self.status),
            sort_order=self.sort_order,
            created_by_id=self.created_by_id,
            assignee_id=self.assignee_id,
            title=self.title,
            description=self.description,
            priority=self.priority,
            due_date=self.due_date,
        )
