from __future__ import annotations

import os
from typing import Iterable, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from taskboard.kanban.models import TaskStatus
from taskboard.kanban.policy import BOARD_TEMPLATES, ColumnStatusPolicy
from taskboard.models.board import Board, BoardColumn


def wip_limits_enforced() -> bool:
    # read per call so a deployment can flip it without a code change
    return os.getenv("WIP_LIMITS_ENFORCED", "false").lower() == "true"


def create_board(
    db: Session,
    *,
    project_id: int,
    name: str,
    columns: Iterable[Tuple[str, Optional[TaskStatus], Optional[int]]],
    is_default: bool = False,
) -> Board:
    """Create a board with its columns. Flushes, does not commit."""
    position = (
        db.query(func.count(Board.id)).filter(Board.project_id == project_id).scalar() or 0
    )
    board = Board(project_id=project_id, name=name, is_default=is_default, sort_order=position)
    for i, (col_name, status, wip_limit) in enumerate(columns):
        board.columns.append(
            BoardColumn(
                name=col_name,
                status=status.value if status is not None else None,
                wip_limit=wip_limit,
                sort_order=i,
            )
        )
    db.add(board)
    db.flush()
    return board


def create_board_from_template(
    db: Session, *, project_id: int, name: str, template: str, is_default: bool = False
) -> Board:
    try:
        columns = BOARD_TEMPLATES[template]
    except KeyError:
        raise ValueError(f"Unknown board template: {template}")
    return create_board(db, project_id=project_id, name=name, columns=columns, is_default=is_default)


def policy_for_board(db: Session, board_id: int) -> ColumnStatusPolicy:
    rows = db.query(BoardColumn).filter(BoardColumn.board_id == board_id).all()
    return ColumnStatusPolicy(
        [row.to_config() for row in rows],
        enforce_wip=wip_limits_enforced(),
    )
