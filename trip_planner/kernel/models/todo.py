"""
Task board model.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trip_planner.kernel.models.base import Base, OwnedMixin


class TodoStatus(str, Enum):
    """Task board columns. Each todo sits in exactly one."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Todo(Base, OwnedMixin):
    """
    A task on the board.

    ``position`` ranks the todo inside its status column only; the values
    are sparse floats compared against each other, never indexes.
    """

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[TodoStatus] = mapped_column(
        String(20),
        default=TodoStatus.PENDING,
        index=True,
        nullable=False,
    )
    due_date: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    position: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<Todo {self.id} {self.status}@{self.position}>"
