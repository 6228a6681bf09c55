# taskboard/board/board_router.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from taskboard.auth.auth_router import get_current_user
from taskboard.board.board_service import create_board, create_board_from_template, policy_for_board
from taskboard.database import get_db
from taskboard.models.board import Board, BoardColumn
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.project.project_service import get_owned_project, owns_project
from taskboard.schemas.board_schema import (
    BoardCreate,
    BoardRead,
    BoardView,
    ColumnCreate,
    ColumnRead,
    ColumnUpdate,
    ColumnView,
)
from taskboard.schemas.task_schema import TaskRead

router = APIRouter(prefix="/boards", tags=["boards"])


def _get_board(db: Session, board_id: int, user: User) -> Board:
    board = db.get(Board, board_id)
    if not board or not owns_project(db, board.project_id, user):
        raise HTTPException(404, "Board not found")
    return board


# ==========================
#  CREATE BOARD
# ==========================
@router.post("/", response_model=BoardRead, status_code=201)
def create_new_board(
    data: BoardCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_owned_project(db, data.project_id, user)

    if data.template:
        board = create_board_from_template(
            db, project_id=data.project_id, name=data.name, template=data.template
        )
    elif data.columns:
        board = create_board(
            db,
            project_id=data.project_id,
            name=data.name,
            columns=[(c.name, c.status, c.wip_limit) for c in data.columns],
        )
    else:
        raise HTTPException(400, "Either template or columns must be provided")

    db.commit()
    db.refresh(board)
    return board


# ==========================
#  LIST BOARDS OF A PROJECT
# ==========================
@router.get("/project/{project_id}", response_model=list[BoardRead])
def get_boards_by_project(
    project_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_owned_project(db, project_id, user)
    return (
        db.query(Board)
        .filter(Board.project_id == project_id)
        .order_by(Board.sort_order.asc())
        .all()
    )


# ==========================
#  BOARD VIEW (columns + ordered tasks)
# ==========================
@router.get("/{board_id}", response_model=BoardView)
def get_board(board_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    board = _get_board(db, board_id, user)
    policy = policy_for_board(db, board_id)

    tasks = (
        db.query(Task)
        .filter(Task.board_id == board_id)
        .order_by(Task.sort_order.asc(), Task.id.asc())
        .all()
    )

    columns = []
    for column in board.columns:
        column_tasks = [t for t in tasks if t.column_id == column.id]
        columns.append(
            ColumnView(
                **ColumnRead.model_validate(column).model_dump(),
                task_count=len(column_tasks),
                wip_exceeded=policy.is_wip_exceeded(column.id, len(column_tasks)),
                tasks=[TaskRead.model_validate(t) for t in column_tasks],
            )
        )

    return BoardView(
        id=board.id,
        project_id=board.project_id,
        name=board.name,
        is_default=board.is_default,
        columns=columns,
    )


# ==========================
#  ADD COLUMN
# ==========================
@router.post("/{board_id}/columns", response_model=ColumnRead, status_code=201)
def add_column(
    board_id: int,
    data: ColumnCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _get_board(db, board_id, user)

    position = (
        db.query(func.max(BoardColumn.sort_order))
        .filter(BoardColumn.board_id == board_id)
        .scalar()
    )
    column = BoardColumn(
        board_id=board_id,
        name=data.name,
        status=data.status.value if data.status else None,
        wip_limit=data.wip_limit,
        sort_order=0 if position is None else position + 1,
    )
    db.add(column)
    db.commit()
    db.refresh(column)
    return column


# ==========================
#  UPDATE COLUMN (PATCH)
# ==========================
@router.patch("/{board_id}/columns/{column_id}", response_model=ColumnRead)
def update_column(
    board_id: int,
    column_id: int,
    data: ColumnUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _get_board(db, board_id, user)
    column = db.get(BoardColumn, column_id)
    if not column or column.board_id != board_id:
        raise HTTPException(404, "Column not found")

    if data.name is not None:
        column.name = data.name
    if data.clear_status:
        column.status = None
    elif data.status is not None:
        column.status = data.status.value
    if data.clear_wip_limit:
        column.wip_limit = None
    elif data.wip_limit is not None:
        column.wip_limit = data.wip_limit

    db.commit()
    db.refresh(column)
    return column
