# taskboard/activity/activity_router.py
from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskboard.auth.auth_router import get_current_user
from taskboard.database import get_db
from taskboard.models.activity_log import ActivityLog
from taskboard.schemas.activity_schema import ActivityLogRead

router = APIRouter(prefix="/activity", tags=["activity"], dependencies=[Depends(get_current_user)])


@router.get("/{entity_type}/{entity_id}", response_model=list[ActivityLogRead])
def list_activity(
    entity_type: Literal["task", "project", "board"],
    entity_id: int,
    limit: int = 50,
    db: Session = Depends(get_db),
):
    return (
        db.query(ActivityLog)
        .filter(ActivityLog.entity_type == entity_type, ActivityLog.entity_id == entity_id)
        .order_by(ActivityLog.created_at.asc(), ActivityLog.id.asc())
        .limit(limit)
        .all()
    )
