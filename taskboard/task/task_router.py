import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from taskboard.auth.auth_router import get_current_user
from taskboard.database import get_db
from taskboard.kanban.errors import InvalidColumnReference, InvalidTaskReference, WipLimitExceeded
from taskboard.kanban.events import ActivityLogged, TaskAssigned, compute_events
from taskboard.kanban.models import TaskStatus, TaskUpdate as TaskDelta
from taskboard.kanban.ordering import renumber
from taskboard.models.board import BoardColumn
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.project.project_service import check_task_access, owns_project, visible_tasks
from taskboard.schemas.task_schema import TaskCreate, TaskUpdate, TaskRead, TaskMove, TaskMoveResult
from taskboard.task.move_service import dispatch_events, move_task
from taskboard.task.task_store import TaskStore

logger = logging.getLogger("taskboard.task")


router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)


def _get_task(db: Session, task_id: int, user: User, assignee_ok: bool = True) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    check_task_access(db, task, user, assignee_ok=assignee_ok)
    return task


def _check_assignee(db: Session, assignee_id: Optional[int]) -> None:
    if assignee_id is not None and not db.get(User, assignee_id):
        raise HTTPException(400, "Assignee not found")


@router.post("/", response_model=TaskRead, status_code=201)
def create_task(
    data: TaskCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    column = db.get(BoardColumn, data.column_id)
    if not column or not owns_project(db, column.board.project_id, user):
        raise HTTPException(404, "Column not found")
    _check_assignee(db, data.assignee_id)

    store = TaskStore(db)
    task = Task(
        title=data.title,
        description=data.description,
        priority=data.priority,
        due_date=data.due_date,
        # a mapped column decides the status
        status=column.status or data.status.value,
        project_id=column.board.project_id,
        board_id=column.board_id,
        column_id=column.id,
        sort_order=store.next_sort_order(column.id, for_update=True),
        assignee_id=data.assignee_id,
        created_by_id=user.id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    events = [
        ActivityLogged(
            acting_user_id=user.id,
            entity_type="task",
            entity_id=task.id,
            action="created",
            changes={"task_title": task.title},
        )
    ]
    if task.assignee_id is not None and task.assignee_id != user.id:
        events.insert(0, TaskAssigned.for_task(task.to_card(), title="New Task Assigned"))
    dispatch_events(db, events)

    return task


@router.get("/", response_model=list[TaskRead])
def get_all_tasks(
    project_id: Optional[int] = None,
    board_id: Optional[int] = None,
    column_id: Optional[int] = None,
    assignee_id: Optional[int] = None,
    status: Optional[TaskStatus] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    q = visible_tasks(db, user)
    if project_id is not None:
        q = q.filter(Task.project_id == project_id)
    if board_id is not None:
        q = q.filter(Task.board_id == board_id)
    if column_id is not None:
        q = q.filter(Task.column_id == column_id)
    if assignee_id is not None:
        q = q.filter(Task.assignee_id == assignee_id)
    if status is not None:
        q = q.filter(Task.status == status.value)
    return q.order_by(Task.column_id.asc(), Task.sort_order.asc(), Task.created_at.desc()).all()


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _get_task(db, task_id, user)


@router.patch("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    data: TaskUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = _get_task(db, task_id, user)
    before = task.to_card()

    changes = data.model_dump(exclude_unset=True)
    if "assignee_id" in changes:
        _check_assignee(db, changes["assignee_id"])

    for field, value in changes.items():
        # these columns are NOT NULL, an explicit null means "leave it"
        if value is None and field in ("title", "status", "priority"):
            continue
        if field == "status":
            value = value.value
        setattr(task, field, value)

    db.commit()
    db.refresh(task)

    events = compute_events(before, task.to_card(), user.id)
    dispatch_events(db, events)
    return task


@router.post("/{task_id}/move", response_model=TaskMoveResult)
def move(
    task_id: int,
    data: TaskMove,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _get_task(db, task_id, user)

    try:
        outcome = move_task(db, task_id, data.column_id, data.index, user.id)
    except InvalidTaskReference:
        raise HTTPException(404, "Task not found")
    except InvalidColumnReference:
        raise HTTPException(404, "Column not found on this board")
    except WipLimitExceeded as exc:
        raise HTTPException(409, str(exc))

    return TaskMoveResult(
        task=TaskRead.model_validate(outcome.task),
        updates=[u.as_dict() for u in outcome.plan.updates],
        wip_exceeded=outcome.plan.wip_exceeded,
    )


@router.delete("/{task_id}", status_code=204)
def delete_task(
    task_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    # only the project owner removes tasks
    task = _get_task(db, task_id, user, assignee_ok=False)
    column_id, title = task.column_id, task.title

    db.delete(task)
    db.flush()

    # close the gap left in the column, same commit as the delete
    store = TaskStore(db)
    remaining = store.list_tasks_by_column(column_id)
    store.apply_delta(TaskDelta(id=t.id, sort_order=t.sort_order) for t in renumber(remaining))
    logger.info("task_deleted", extra={"task_id": task_id, "column_id": column_id})

    dispatch_events(
        db,
        [
            ActivityLogged(
                acting_user_id=user.id,
                entity_type="task",
                entity_id=task_id,
                action="deleted",
                changes={"task_title": title},
            )
        ],
    )
    return
