"""
Pydantic schemas for API request/response validation.
"""

from trip_planner.schemas.common import HealthResponse, MessageResponse
from trip_planner.schemas.auth import LoginRequest, LoginResponse, ProfileResponse, ProfileUpdate
from trip_planner.schemas.todo import TodoCreate, TodoUpdate, TodoMove, TodoRenumber, TodoResponse
from trip_planner.schemas.trip import (
    ItineraryBase,
    ItineraryResponse,
    StayBase,
    StayResponse,
    ExpenseCreate,
    ExpenseResponse,
)

__all__ = [
    "MessageResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "ProfileResponse",
    "ProfileUpdate",
    "TodoCreate",
    "TodoUpdate",
    "TodoMove",
    "TodoRenumber",
    "TodoResponse",
    "ItineraryBase",
    "ItineraryResponse",
    "StayBase",
    "StayResponse",
    "ExpenseCreate",
    "ExpenseResponse",
]
