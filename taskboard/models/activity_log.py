# taskboard/models/activity_log.py
from __future__ import annotations

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from taskboard.database import Base


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    entity_type = Column(String, nullable=False)  # task | project | board
    entity_id = Column(Integer, nullable=False, index=True)
    action = Column(String, nullable=False)       # created | updated | moved | deleted
    changes = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
