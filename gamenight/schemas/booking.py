"""Booking schemas."""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime, date


class BookingStatus(str, Enum):
    """Two-state booking lifecycle. Cancelled is terminal."""

    ACTIVE = "active"
    CANCELLED = "cancelled"


class BookingRequest(BaseModel):
    """
    Schema for creating or editing a booking through the API.

    Table and game system are optional here so that their absence is
    reported by booking validation rather than as a schema error.
    """

    date: date
    table_id: Optional[str] = None
    terrain_box_id: Optional[str] = None
    game_system: Optional[str] = None
    player_count: int = Field(default=2, ge=1, le=10)


class BookingCandidate(BaseModel):
    """A booking about to be validated and written."""

    id: Optional[str] = None
    date: date
    table_id: Optional[str] = None
    terrain_box_id: Optional[str] = None
    member_id: str
    member_name: str
    game_system: Optional[str] = None
    player_count: int = 2
    status: Optional[BookingStatus] = None
    created_at: Optional[datetime] = None


class BookingInDB(BaseModel):
    """Schema for a booking from the store."""

    id: str
    date: date
    table_id: str
    terrain_box_id: Optional[str] = None
    member_id: str
    member_name: str
    game_system: str
    player_count: int
    created_at: datetime
    status: BookingStatus = BookingStatus.ACTIVE
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[str] = None
    permanent: bool = False

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE
