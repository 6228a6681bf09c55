# taskboard/schemas/project_schema.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional
from datetime import datetime

ProjectStatus = Literal["planning", "active", "on_hold", "completed", "archived"]


# --------- Base schema (common fields) ---------
class ProjectBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    status: ProjectStatus = "planning"
    priority: Literal["low", "medium", "high", "urgent"] = "medium"


# --------- For creating a project (POST) ---------
class ProjectCreate(ProjectBase):
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    # columns of the default board
    board_template: Literal["standard", "tasks"] = "standard"


# --------- For updating a project (PATCH/PUT) ---------
class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[Literal["low", "medium", "high", "urgent"]] = None
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None


# --------- For reading a project (GET responses) ---------
class ProjectRead(ProjectBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
