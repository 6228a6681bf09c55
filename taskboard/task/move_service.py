import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.activity.activity_service import record
from taskboard.board.board_service import policy_for_board
from taskboard.kanban.errors import InvalidTaskReference
from taskboard.kanban.events import ActivityLogged, Event, compute_events
from taskboard.kanban.models import MovePlan
from taskboard.kanban.moves import plan_move
from taskboard.models.task import Task
from taskboard.notification.notification_service import deliver
from taskboard.task.task_store import TaskStore

logger = logging.getLogger("taskboard.kanban")


@dataclass
class MoveOutcome:
    task: Task
    plan: MovePlan
    events: List[Event] = field(default_factory=list)


def dispatch_events(db: Session, events: Sequence[Event]) -> bool:
    """Persist notifications and activity entries in one commit.

    Runs after the task change is committed. A failure here drops the events
    and leaves the task change in place.
    """
    if not events:
        return True

    try:
        for event in events:
            if isinstance(event, ActivityLogged):
                record(db, event, commit=False)
            else:
                deliver(db, event, commit=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "event_dispatch_failed",
            extra={"event_types": [type(e).__name__ for e in events]},
        )
        return False

    return True


def move_task(
    db: Session,
    task_id: int,
    column_id: int,
    index: int,
    acting_user_id: int,
) -> MoveOutcome:
    """Move a task to position `index` of `column_id` on its own board.

    Raises InvalidTaskReference / InvalidColumnReference / WipLimitExceeded
    before anything is written.
    """
    store = TaskStore(db)
    task = store.get(task_id)
    if task is None:
        raise InvalidTaskReference(task_id)

    policy = policy_for_board(db, task.board_id)
    cards = store.list_tasks_by_board(task.board_id, for_update=True)
    plan = plan_move(cards, task_id, column_id, index, policy)

    if plan.is_noop:
        logger.info("task_move_noop", extra={"task_id": task_id, "column_id": column_id, "index": index})
        return MoveOutcome(task=task, plan=plan)

    store.apply_delta(plan.updates)
    logger.info(
        "task_moved",
        extra={
            "task_id": task_id,
            "from_column": plan.before.column_id,
            "to_column": plan.after.column_id,
            "index": plan.after.sort_order,
            "update_count": len(plan.updates),
            "wip_exceeded": plan.wip_exceeded,
        },
    )
    if plan.wip_exceeded:
        logger.warning(
            "wip_limit_exceeded",
            extra={"column_id": column_id, "task_count": plan.destination_count},
        )

    events = compute_events(plan.before, plan.after, acting_user_id)
    dispatch_events(db, events)

    db.refresh(task)
    return MoveOutcome(task=task, plan=plan, events=events)
