# taskboard/schemas/board_schema.py
from __future__ import annotations

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from taskboard.kanban.models import TaskStatus
from taskboard.schemas.task_schema import TaskRead


class ColumnCreate(BaseModel):
    name: str = Field(min_length=1)
    status: Optional[TaskStatus] = None
    wip_limit: Optional[int] = Field(default=None, gt=0)


class ColumnUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    status: Optional[TaskStatus] = None
    wip_limit: Optional[int] = Field(default=None, gt=0)
    # explicit switches, since None above means "unchanged"
    clear_status: bool = False
    clear_wip_limit: bool = False


class BoardCreate(BaseModel):
    project_id: int
    name: str = Field(min_length=1)
    template: Optional[Literal["standard", "tasks"]] = None
    columns: list[ColumnCreate] = []


class ColumnRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    board_id: int
    name: str
    status: Optional[TaskStatus] = None
    wip_limit: Optional[int] = None
    sort_order: int


class BoardRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    name: str
    is_default: bool
    sort_order: int
    columns: list[ColumnRead] = []


class ColumnView(ColumnRead):
    task_count: int
    wip_exceeded: bool
    tasks: list[TaskRead] = []


class BoardView(BaseModel):
    id: int
    project_id: int
    name: str
    is_default: bool
    columns: list[ColumnView]
