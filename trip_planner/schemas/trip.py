"""
Itinerary, stay and expense schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ItineraryBase(BaseModel):
    """Itinerary entry fields. PUT replaces all of them."""

    title: str = Field(..., min_length=1, max_length=500)
    date: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = Field(None, max_length=50)
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lon: Optional[float] = Field(None, ge=-180, le=180)


class ItineraryResponse(ItineraryBase):
    id: int

    class Config:
        from_attributes = True


class StayBase(BaseModel):
    """Accommodation fields. PUT replaces all of them."""

    name: str = Field(..., min_length=1, max_length=500)
    address: Optional[str] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    booking_ref: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    website: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)


class StayResponse(StayBase):
    id: int

    class Config:
        from_attributes = True


class ExpenseCreate(BaseModel):
    """Budget line."""

    title: str = Field(..., min_length=1, max_length=500)
    amount: float = Field(..., allow_inf_nan=False)
    category: Optional[str] = Field(None, max_length=50)
    date: Optional[str] = None
    notes: Optional[str] = None


class ExpenseResponse(ExpenseCreate):
    id: int

    class Config:
        from_attributes = True
