from __future__ import annotations

from typing import Any, Optional
from sqlalchemy.orm import Session

from taskboard.kanban.events import ActivityLogged
from taskboard.models.activity_log import ActivityLog


def log_activity(
    db: Session,
    *,
    user_id: Optional[int],
    entity_type: str,
    entity_id: int,
    action: str,
    changes: Optional[dict[str, Any]] = None,
    commit: bool = True,
) -> ActivityLog:
    entry = ActivityLog(
        user_id=user_id,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        changes=changes or {},
    )
    db.add(entry)
    if commit:
        db.commit()
        db.refresh(entry)
    return entry


def record(db: Session, event: ActivityLogged, commit: bool = True) -> ActivityLog:
    return log_activity(
        db,
        user_id=event.acting_user_id,
        entity_type=event.entity_type,
        entity_id=event.entity_id,
        action=event.action,
        changes=event.changes,
        commit=commit,
    )
