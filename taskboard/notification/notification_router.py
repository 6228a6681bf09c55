# taskboard/notification/notification_router.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import func

from taskboard.auth.auth_router import get_current_user
from taskboard.database import get_db
from taskboard.models.notification import Notification
from taskboard.models.user import User
from taskboard.schemas.notification_schema import NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _get_own(db: Session, notification_id: int, user: User) -> Notification:
    n = db.get(Notification, notification_id)
    if not n or n.user_id != user.id:
        raise HTTPException(status_code=404, detail="Notification not found")
    return n


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int = 30,
    unread_only: bool = False,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    q = db.query(Notification).filter(Notification.user_id == user.id)
    if unread_only:
        q = q.filter(Notification.is_read == False)  # noqa: E712
    q = q.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit)
    return q.all()


@router.get("/unread_count")
def unread_count(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    count = (
        db.query(func.count(Notification.id))
        .filter(Notification.user_id == user.id, Notification.is_read == False)  # noqa: E712
        .scalar()
    )
    return {"unread": int(count or 0)}


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    n = _get_own(db, notification_id, user)

    n.is_read = True
    db.commit()
    db.refresh(n)
    return n


@router.post("/read_all")
def mark_all_read(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    db.query(Notification).filter(Notification.user_id == user.id, Notification.is_read == False).update(  # noqa: E712
        {"is_read": True}
    )
    db.commit()
    return {"ok": True}


@router.delete("/{notification_id}", status_code=204)
def delete_notification(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    n = _get_own(db, notification_id, user)

    db.delete(n)
    db.commit()
    return
