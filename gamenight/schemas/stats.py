"""Play statistics schemas."""
from pydantic import BaseModel
from typing import Optional, List
from datetime import date

from gamenight.schemas.booking import BookingStatus


class GameCount(BaseModel):
    name: str
    count: int


class StatsResponse(BaseModel):
    """Schema for play statistics."""

    total: int
    status: Optional[BookingStatus] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    games: List[GameCount]
