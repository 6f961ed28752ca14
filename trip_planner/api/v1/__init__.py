"""
API routes.

Everything except login/logout sits behind get_current_subject, applied
at router level so no protected route can skip it.
"""

from fastapi import APIRouter, Depends

from trip_planner.api.deps import get_current_subject
from trip_planner.api.v1 import auth, todos, trip

router = APIRouter()

router.include_router(auth.router, tags=["Authentication"])

protected = APIRouter(dependencies=[Depends(get_current_subject)])
protected.include_router(auth.profile_router, tags=["Profile"])
protected.include_router(todos.router, prefix="/todos", tags=["Todos"])
protected.include_router(trip.itinerary_router, prefix="/itinerary", tags=["Itinerary"])
protected.include_router(trip.stays_router, prefix="/stays", tags=["Stays"])
protected.include_router(trip.expenses_router, prefix="/expenses", tags=["Expenses"])

router.include_router(protected)
