"""
Task board schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field

from trip_planner.kernel.models.todo import TodoStatus


class TodoCreate(BaseModel):
    """New todo. It always starts at the bottom of the pending column."""

    title: str = Field(..., min_length=1, max_length=500)
    due_date: Optional[str] = None


class TodoUpdate(BaseModel):
    """
    Partial todo update.

    A new status sends the todo to the bottom of that column. Positions
    are only changed through a move, so a body carrying one is rejected.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    status: Optional[TodoStatus] = None
    due_date: Optional[str] = None

    class Config:
        extra = "forbid"


class TodoMove(BaseModel):
    """Drop a todo into ``status`` before the item currently at ``index``."""

    status: TodoStatus
    index: int = Field(..., ge=0)


class TodoRenumber(BaseModel):
    """Column to renumber."""

    status: TodoStatus


class TodoResponse(BaseModel):
    """Todo as returned to the board."""

    id: int
    title: str
    status: str
    due_date: Optional[str] = None
    position: float

    class Config:
        from_attributes = True
