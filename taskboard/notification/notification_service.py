from __future__ import annotations

from typing import Optional
from sqlalchemy.orm import Session

from taskboard.kanban.events import TaskNotification
from taskboard.models.notification import Notification


def create_notification(
    db: Session,
    *,
    user_id: int,
    title: str,
    message: str | None = None,
    type: str = "info",
    related_entity_type: Optional[str] = None,
    related_entity_id: Optional[int] = None,
    commit: bool = True,
) -> Notification:
    n = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        related_entity_type=related_entity_type,
        related_entity_id=related_entity_id,
        is_read=False,
    )
    db.add(n)
    if commit:
        db.commit()
        db.refresh(n)
    return n


def deliver(db: Session, event: TaskNotification, commit: bool = True) -> Notification:
    return create_notification(
        db,
        user_id=event.target_user_id,
        title=event.title,
        message=event.message,
        type=event.type,
        related_entity_type=event.related_entity_type,
        related_entity_id=event.related_entity_id,
        commit=commit,
    )
