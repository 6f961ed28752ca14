"""
CRUD over per-user trip records (itinerary, stays, expenses).
"""

from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trip_planner.kernel.models.base import OwnedMixin

ModelT = TypeVar("ModelT", bound=OwnedMixin)


class OwnedRecordService(Generic[ModelT]):
    """
    List, create, replace and delete rows of one owned table.

    Usage:
        stays = OwnedRecordService(session, Stay)
        await stays.create(user.id, {"name": "Hotel Adlon"})
    """

    def __init__(
        self,
        session: AsyncSession,
        model: Type[ModelT],
        order_by: Sequence[Any] = (),
    ):
        self.session = session
        self.model = model
        self.order_by = tuple(order_by)

    async def list(self, user_id: int) -> List[ModelT]:
        query = select(self.model).where(self.model.user_id == user_id)
        query = query.order_by(*self.order_by, self.model.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get(self, user_id: int, record_id: int) -> Optional[ModelT]:
        query = select(self.model).where(
            self.model.id == record_id,
            self.model.user_id == user_id,
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def create(self, user_id: int, fields: dict[str, Any]) -> ModelT:
        record = self.model(user_id=user_id, **fields)
        self.session.add(record)
        await self.session.flush()
        return record

    async def replace(
        self,
        user_id: int,
        record_id: int,
        fields: dict[str, Any],
    ) -> Optional[ModelT]:
        """Overwrite every given field. Returns None when the row is not the user's."""
        record = await self.get(user_id, record_id)
        if not record:
            return None
        for name, value in fields.items():
            setattr(record, name, value)
        await self.session.flush()
        return record

    async def delete(self, user_id: int, record_id: int) -> bool:
        record = await self.get(user_id, record_id)
        if not record:
            return False
        await self.session.delete(record)
        await self.session.flush()
        return True
