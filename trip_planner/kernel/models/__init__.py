"""
Kernel Data Models

SQLAlchemy models for users and the per-user trip records.
"""

from trip_planner.kernel.models.base import Base, OwnedMixin
from trip_planner.kernel.models.user import User
from trip_planner.kernel.models.todo import Todo, TodoStatus
from trip_planner.kernel.models.trip import ItineraryItem, Stay, Expense

__all__ = [
    "Base",
    "OwnedMixin",
    "User",
    "Todo",
    "TodoStatus",
    "ItineraryItem",
    "Stay",
    "Expense",
]
