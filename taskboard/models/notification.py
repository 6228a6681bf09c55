# taskboard/models/notification.py
from __future__ import annotations

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from taskboard.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)

    # per-user inbox
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # type + text
    type = Column(String, nullable=False, default="info")  # info | task_assigned | task_completed
    title = Column(String, nullable=False)
    message = Column(String, nullable=True)

    # loose link to whatever the notification is about (no FK: the task may be gone)
    related_entity_type = Column(String, nullable=True)
    related_entity_id = Column(Integer, nullable=True, index=True)

    is_read = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
