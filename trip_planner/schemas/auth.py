"""
Authentication and profile schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """
    Login request.

    Both fields are optional here so the handler can answer a missing one
    with 400 instead of a validation error.
    """

    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    """Returned after a successful login; the credential travels in the cookie."""

    username: str
    display_name: Optional[str] = None


class ProfileResponse(BaseModel):
    """User profile response."""

    id: int
    username: str
    display_name: Optional[str] = None
    home_city: Optional[str] = None
    home_lat: Optional[float] = None
    home_lon: Optional[float] = None
    trip_date: Optional[str] = None
    budget_limit: Optional[float] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """Partial profile update. Only fields present in the body are changed."""

    display_name: Optional[str] = Field(None, max_length=255)
    home_city: Optional[str] = Field(None, max_length=255)
    home_lat: Optional[float] = Field(None, ge=-90, le=90)
    home_lon: Optional[float] = Field(None, ge=-180, le=180)
    trip_date: Optional[str] = None
    budget_limit: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    password: Optional[str] = Field(None, min_length=8, max_length=128)
