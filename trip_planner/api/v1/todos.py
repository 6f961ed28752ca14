"""
Task board endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from trip_planner.api.deps import CurrentSubject, DbSession
from trip_planner.kernel.board import BoardService, InvalidMoveTarget
from trip_planner.kernel.ordering import OrderingDegeneracy
from trip_planner.schemas.common import MessageResponse
from trip_planner.schemas.todo import (
    TodoCreate,
    TodoMove,
    TodoRenumber,
    TodoResponse,
    TodoUpdate,
)

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")


@router.get("", response_model=List[TodoResponse])
async def list_todos(subject: CurrentSubject, db: DbSession):
    """List the user's todos, grouped by status and in board order."""
    todos = await BoardService(db).list_todos(subject.id)
    return [TodoResponse.model_validate(t) for t in todos]


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
async def create_todo(data: TodoCreate, subject: CurrentSubject, db: DbSession):
    """Create a todo at the bottom of the pending column."""
    todo = await BoardService(db).create_todo(subject.id, data.title, data.due_date)
    return TodoResponse.model_validate(todo)


@router.post("/renumber", response_model=List[TodoResponse])
async def renumber_column(data: TodoRenumber, subject: CurrentSubject, db: DbSession):
    """
    Respace one column's positions evenly, keeping its order.

    Used by the client after a move is rejected with 409.
    """
    todos = await BoardService(db).renumber_column(subject.id, data.status)
    return [TodoResponse.model_validate(t) for t in todos]


@router.put("/{todo_id}", response_model=TodoResponse)
async def update_todo(todo_id: int, data: TodoUpdate, subject: CurrentSubject, db: DbSession):
    """Partially update a todo. A new status puts it at the bottom of that column."""
    todo = await BoardService(db).update_todo(
        subject.id,
        todo_id,
        data.model_dump(exclude_unset=True),
    )
    if not todo:
        raise _not_found()
    return TodoResponse.model_validate(todo)


@router.post("/{todo_id}/move", response_model=TodoResponse)
async def move_todo(todo_id: int, data: TodoMove, subject: CurrentSubject, db: DbSession):
    """
    Drop a todo into a column at an index.

    The new position is computed from the two todos it lands between;
    no other todo is modified.
    """
    board = BoardService(db)
    try:
        todo = await board.move_todo(subject.id, todo_id, data.status, data.index)
    except InvalidMoveTarget as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except OrderingDegeneracy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Column positions exhausted; renumber the column and retry",
        )

    if not todo:
        raise _not_found()
    return TodoResponse.model_validate(todo)


@router.delete("/{todo_id}", response_model=MessageResponse)
async def delete_todo(todo_id: int, subject: CurrentSubject, db: DbSession):
    """Delete a todo. Unknown ids are ignored."""
    await BoardService(db).delete_todo(subject.id, todo_id)
    return MessageResponse(message="Deleted")
