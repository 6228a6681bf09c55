# taskboard/schemas/task_schema.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional
from datetime import datetime

from taskboard.kanban.models import TaskStatus

Priority = Literal["low", "medium", "high", "urgent"]


# --------- Base schema (common fields) ----------
class TaskBase(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    priority: Priority = "medium"
    due_date: Optional[datetime] = None


# --------- For CREATE ----------
class TaskCreate(TaskBase):
    column_id: int
    # only used when the column has no status of its own
    status: TaskStatus = TaskStatus.TODO
    assignee_id: Optional[int] = None


# --------- For UPDATE (PATCH) ----------
# column / order are not editable here, use POST /tasks/{id}/move
class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None
    assignee_id: Optional[int] = None


# --------- For MOVE (drag & drop intent) ----------
class TaskMove(BaseModel):
    column_id: int
    index: int


# --------- For READ (responses) ----------
class TaskRead(TaskBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    board_id: int
    column_id: int
    status: TaskStatus
    sort_order: int
    assignee_id: Optional[int] = None
    created_by_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class TaskDeltaRead(BaseModel):
    id: int
    column_id: Optional[int] = None
    status: Optional[TaskStatus] = None
    sort_order: Optional[int] = None


class TaskMoveResult(BaseModel):
    task: TaskRead
    updates: list[TaskDeltaRead]
    wip_exceeded: bool
