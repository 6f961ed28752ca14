"""
Itinerary, stays and expenses endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from trip_planner.api.deps import CurrentSubject, DbSession
from trip_planner.kernel.models.trip import Expense, ItineraryItem, Stay
from trip_planner.kernel.records import OwnedRecordService
from trip_planner.schemas.common import MessageResponse
from trip_planner.schemas.trip import (
    ExpenseCreate,
    ExpenseResponse,
    ItineraryBase,
    ItineraryResponse,
    StayBase,
    StayResponse,
)

itinerary_router = APIRouter()
stays_router = APIRouter()
expenses_router = APIRouter()


def _itinerary(db: AsyncSession) -> OwnedRecordService[ItineraryItem]:
    return OwnedRecordService(db, ItineraryItem, order_by=(ItineraryItem.date, ItineraryItem.time))


def _stays(db: AsyncSession) -> OwnedRecordService[Stay]:
    return OwnedRecordService(db, Stay, order_by=(Stay.check_in,))


def _expenses(db: AsyncSession) -> OwnedRecordService[Expense]:
    return OwnedRecordService(db, Expense, order_by=(Expense.date.desc(),))


def _not_found(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")


# --- Itinerary ---

@itinerary_router.get("", response_model=List[ItineraryResponse])
async def list_itinerary(subject: CurrentSubject, db: DbSession):
    """List itinerary entries by date and time."""
    items = await _itinerary(db).list(subject.id)
    return [ItineraryResponse.model_validate(i) for i in items]


@itinerary_router.post("", response_model=ItineraryResponse, status_code=status.HTTP_201_CREATED)
async def create_itinerary_item(data: ItineraryBase, subject: CurrentSubject, db: DbSession):
    item = await _itinerary(db).create(subject.id, data.model_dump())
    return ItineraryResponse.model_validate(item)


@itinerary_router.put("/{item_id}", response_model=ItineraryResponse)
async def update_itinerary_item(
    item_id: int,
    data: ItineraryBase,
    subject: CurrentSubject,
    db: DbSession,
):
    item = await _itinerary(db).replace(subject.id, item_id, data.model_dump())
    if not item:
        raise _not_found("Itinerary item")
    return ItineraryResponse.model_validate(item)


@itinerary_router.delete("/{item_id}", response_model=MessageResponse)
async def delete_itinerary_item(item_id: int, subject: CurrentSubject, db: DbSession):
    await _itinerary(db).delete(subject.id, item_id)
    return MessageResponse(message="Deleted")


# --- Stays ---

@stays_router.get("", response_model=List[StayResponse])
async def list_stays(subject: CurrentSubject, db: DbSession):
    stays = await _stays(db).list(subject.id)
    return [StayResponse.model_validate(s) for s in stays]


@stays_router.post("", response_model=StayResponse, status_code=status.HTTP_201_CREATED)
async def create_stay(data: StayBase, subject: CurrentSubject, db: DbSession):
    stay = await _stays(db).create(subject.id, data.model_dump())
    return StayResponse.model_validate(stay)


@stays_router.put("/{stay_id}", response_model=StayResponse)
async def update_stay(stay_id: int, data: StayBase, subject: CurrentSubject, db: DbSession):
    stay = await _stays(db).replace(subject.id, stay_id, data.model_dump())
    if not stay:
        raise _not_found("Stay")
    return StayResponse.model_validate(stay)


@stays_router.delete("/{stay_id}", response_model=MessageResponse)
async def delete_stay(stay_id: int, subject: CurrentSubject, db: DbSession):
    await _stays(db).delete(subject.id, stay_id)
    return MessageResponse(message="Deleted")


# --- Expenses ---

@expenses_router.get("", response_model=List[ExpenseResponse])
async def list_expenses(subject: CurrentSubject, db: DbSession):
    """List expenses, newest first."""
    expenses = await _expenses(db).list(subject.id)
    return [ExpenseResponse.model_validate(e) for e in expenses]


@expenses_router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(data: ExpenseCreate, subject: CurrentSubject, db: DbSession):
    expense = await _expenses(db).create(subject.id, data.model_dump())
    return ExpenseResponse.model_validate(expense)


@expenses_router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(expense_id: int, subject: CurrentSubject, db: DbSession):
    await _expenses(db).delete(subject.id, expense_id)
    return MessageResponse(message="Deleted")
