"""
Task board service: todos grouped by status and ordered by position.
"""

from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from trip_planner.config import get_settings
from trip_planner.kernel.models.todo import Todo, TodoStatus
from trip_planner.kernel.ordering import (
    OrderingDegeneracy,
    append_position,
    check_strictly_between,
    compute_insertion_position,
    renumber,
)
from trip_planner.logging_config import get_logger

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("title", "due_date")


class InvalidMoveTarget(ValueError):
    """The requested index does not exist in the destination column."""


def _status_value(status: Any) -> str:
    """Column value for a status given as a TodoStatus or its plain string."""
    return status.value if hasattr(status, "value") else status


class BoardService:
    """
    Todo operations for one database session.

    Every query is scoped to ``user_id``; a todo owned by someone else
    behaves exactly like a missing one.

    Usage:
        board = BoardService(session)
        todo = await board.move_todo(user.id, todo_id, TodoStatus.COMPLETED, 0)
    """

    def __init__(self, session: AsyncSession, gap: Optional[float] = None):
        self.session = session
        self.gap = gap if gap is not None else get_settings().position_gap

    async def list_todos(self, user_id: int) -> List[Todo]:
        """All of a user's todos, column by column, in display order."""
        query = (
            select(Todo)
            .where(Todo.user_id == user_id)
            .order_by(Todo.status, Todo.position, Todo.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_todo(self, user_id: int, todo_id: int) -> Optional[Todo]:
        query = select(Todo).where(Todo.id == todo_id, Todo.user_id == user_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def column(
        self,
        user_id: int,
        status: TodoStatus,
        exclude_id: Optional[int] = None,
    ) -> List[Todo]:
        """Todos in one column in display order, optionally leaving one out."""
        query = select(Todo).where(
            Todo.user_id == user_id,
            Todo.status == _status_value(status),
        )
        if exclude_id is not None:
            query = query.where(Todo.id != exclude_id)
        result = await self.session.execute(query.order_by(Todo.position, Todo.id))
        return list(result.scalars().all())

    async def create_todo(
        self,
        user_id: int,
        title: str,
        due_date: Optional[str] = None,
    ) -> Todo:
        """Create a pending todo at the bottom of the pending column."""
        todo = Todo(
            user_id=user_id,
            title=title,
            due_date=due_date,
            status=TodoStatus.PENDING.value,
            position=await self._end_of_column(user_id, TodoStatus.PENDING),
        )
        self.session.add(todo)
        await self.session.flush()
        return todo

    async def _end_of_column(
        self,
        user_id: int,
        status: Any,
        exclude_id: Optional[int] = None,
    ) -> float:
        query = select(func.max(Todo.position)).where(
            Todo.user_id == user_id,
            Todo.status == _status_value(status),
        )
        if exclude_id is not None:
            query = query.where(Todo.id != exclude_id)
        max_position = (await self.session.execute(query)).scalar_one_or_none()
        return append_position(max_position, self.gap)

    async def update_todo(
        self,
        user_id: int,
        todo_id: int,
        changes: dict[str, Any],
    ) -> Optional[Todo]:
        """
        Apply a partial update. Returns None when the todo is not found.

        Positions are never written directly. A todo whose status changes
        goes to the bottom of its new column; placing it anywhere else is
        what move_todo is for.
        """
        todo = await self.get_todo(user_id, todo_id)
        if not todo:
            return None

        for field in UPDATABLE_FIELDS:
            if changes.get(field) is not None:
                setattr(todo, field, changes[field])

        status = changes.get("status")
        if status is not None and _status_value(status) != todo.status:
            todo.position = await self._end_of_column(user_id, status, exclude_id=todo.id)
            todo.status = _status_value(status)

        await self.session.flush()
        return todo

    async def move_todo(
        self,
        user_id: int,
        todo_id: int,
        status: TodoStatus,
        index: int,
    ) -> Optional[Todo]:
        """
        Move a todo to ``index`` within the ``status`` column.

        Only the moved todo's status and position are written. Read, compute
        and write all happen inside the caller's transaction.

        Returns:
            The updated todo, or None when it is not found.

        Raises:
            InvalidMoveTarget: index is outside [0, len(destination)]
            OrderingDegeneracy: the neighbours can no longer be separated;
                the column needs renumbering.
        """
        todo = await self.get_todo(user_id, todo_id)
        if not todo:
            return None

        destination = await self.column(user_id, status, exclude_id=todo.id)
        if not 0 <= index <= len(destination):
            raise InvalidMoveTarget(
                f"Index {index} outside [0, {len(destination)}] for column '{_status_value(status)}'"
            )

        positions = [item.position for item in destination]
        for lower, upper in zip(positions, positions[1:]):
            if lower >= upper:
                # Tied neighbours; only a renumber can restore a strict order
                raise OrderingDegeneracy(lower, upper, upper)

        new_position = compute_insertion_position(positions, index, self.gap)
        try:
            check_strictly_between(positions, index, new_position)
        except OrderingDegeneracy:
            logger.warning(
                "Position gap exhausted",
                extra={"user_id": user_id, "status": _status_value(status), "index": index},
            )
            raise

        todo.status = _status_value(status)
        todo.position = new_position
        await self.session.flush()

        logger.debug(
            "Todo moved",
            extra={"todo_id": todo.id, "status": todo.status, "position": new_position},
        )
        return todo

    async def renumber_column(self, user_id: int, status: TodoStatus) -> List[Todo]:
        """Reassign evenly spaced positions to one column, keeping its order."""
        todos = await self.column(user_id, status)
        for todo, position in zip(todos, renumber(len(todos), self.gap)):
            todo.position = position
        await self.session.flush()

        logger.info(
            "Column renumbered",
            extra={"user_id": user_id, "status": _status_value(status), "count": len(todos)},
        )
        return todos

    async def delete_todo(self, user_id: int, todo_id: int) -> bool:
        todo = await self.get_todo(user_id, todo_id)
        if not todo:
            return False
        await self.session.delete(todo)
        await self.session.flush()
        return True
