"""
User model for identity management.
"""

from typing import Optional

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from trip_planner.kernel.models.base import Base


class User(Base):
    """User account and trip profile."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(150),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Trip profile
    home_city: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    home_lat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    home_lon: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    trip_date: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    budget_limit: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    def __repr__(self) -> str:
        return f"<User {self.username}>"
