# taskboard/kanban/events.py
"""
Side effects of a task change, computed as data.

compute_events() looks at a task before and after a change and says which
notifications and activity entries are owed. Delivering them is the job of the
sinks in taskboard.notification and taskboard.activity.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Union

from taskboard.kanban.models import TRACKED_FIELDS, TaskCard, TaskStatus


@dataclass(frozen=True)
class TaskNotification:
    target_user_id: Any
    related_entity_id: Any
    title: str
    message: str

    type: ClassVar[str] = "info"
    related_entity_type: ClassVar[str] = "task"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "target_user_id": self.target_user_id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "related_entity_type": self.related_entity_type,
            "related_entity_id": self.related_entity_id,
        }


@dataclass(frozen=True)
class TaskAssigned(TaskNotification):
    type: ClassVar[str] = "task_assigned"

    @classmethod
    def for_task(cls, task: TaskCard, title: str = "Task Assigned") -> "TaskAssigned":
        return cls(
            target_user_id=task.assignee_id,
            related_entity_id=task.id,
            title=title,
            message=f"You have been assigned to task: {task.title}",
        )


@dataclass(frozen=True)
class TaskCompleted(TaskNotification):
    type: ClassVar[str] = "task_completed"

    @classmethod
    def for_task(cls, before: TaskCard, after: TaskCard) -> "TaskCompleted":
        return cls(
            target_user_id=before.created_by_id,
            related_entity_id=after.id,
            title="Task Completed",
            message=f'Task "{after.title}" has been completed',
        )


@dataclass(frozen=True)
class ActivityLogged:
    acting_user_id: Any
    entity_type: str
    entity_id: Any
    action: str
    changes: Dict[str, Any] = field(default_factory=dict)


Event = Union[TaskAssigned, TaskCompleted, ActivityLogged]


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def diff(before: TaskCard, after: TaskCard) -> Dict[str, Dict[str, Any]]:
    """Field-level changes, JSON-ready: {field: {"old": ..., "new": ...}}."""
    changes = {}
    for name in TRACKED_FIELDS:
        old, new = getattr(before, name), getattr(after, name)
        if old != new:
            changes[name] = {"old": _plain(old), "new": _plain(new)}
    return changes


def compute_events(before: TaskCard, after: TaskCard, acting_user_id: Any) -> List[Event]:
    """Events owed for one task change, in a fixed order:
    assignment, completion, activity entry.
    """
    changes = diff(before, after)
    if not changes:
        return []

    events: List[Event] = []

    if (
        after.assignee_id is not None
        and after.assignee_id != before.assignee_id
        and after.assignee_id != acting_user_id
    ):
        events.append(TaskAssigned.for_task(after))

    if (
        after.status == TaskStatus.DONE
        and before.status != TaskStatus.DONE
        and before.created_by_id != acting_user_id
    ):
        events.append(TaskCompleted.for_task(before, after))

    events.append(
        ActivityLogged(
            acting_user_id=acting_user_id,
            entity_type="task",
            entity_id=after.id,
            action="updated",
            changes=changes,
        )
    )
    return events
