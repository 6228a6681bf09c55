# taskboard/schemas/activity_schema.py
from __future__ import annotations

from datetime import datetime
from typing import Any
from pydantic import BaseModel, ConfigDict


class ActivityLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int | None = None
    entity_type: str
    entity_id: int
    action: str
    changes: dict[str, Any] | None = None
    created_at: datetime
