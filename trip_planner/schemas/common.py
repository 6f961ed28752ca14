"""
Response bodies shared by several routers.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Acknowledgement for requests with nothing else to return (logout, deletes)."""

    message: str


class HealthResponse(BaseModel):
    """``status`` is "degraded" when the database cannot be reached."""

    status: str
    version: str
    database: str
