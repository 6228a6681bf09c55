# taskboard/models/board.py
from __future__ import annotations

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from taskboard.database import Base
from taskboard.kanban.models import ColumnConfig, TaskStatus


class Board(Base):
    __tablename__ = "boards"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    columns = relationship(
        "BoardColumn",
        order_by="BoardColumn.sort_order",
        cascade="all, delete-orphan",
        back_populates="board",
    )


class BoardColumn(Base):
    __tablename__ = "board_columns"

    id = Column(Integer, primary_key=True, index=True)
    board_id = Column(Integer, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String, nullable=False)
    # status implied by sitting in this column; NULL = organizational lane
    status = Column(String, nullable=True)
    wip_limit = Column(Integer, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)  # display order of the column

    board = relationship("Board", back_populates="columns")

    def to_config(self) -> ColumnConfig:
        return ColumnConfig(
            id=self.id,
            name=self.name,
            status=TaskStatus(self.status) if self.status else None,
            wip_limit=self.wip_limit,
            sort_order=self.sort_order,
        )
