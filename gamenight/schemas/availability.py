"""Availability and collision schemas."""
from pydantic import BaseModel
from typing import Optional, List
from datetime import date


class ResourceStatus(BaseModel):
    """Whether a single table or terrain box is free on a date."""

    id: str
    name: str
    free: bool
    holder_name: Optional[str] = None
    booking_id: Optional[str] = None
    disabled: bool = False


class AvailabilityResponse(BaseModel):
    """Schema for a date's availability."""

    date: date
    is_bookable: bool
    is_cancelled: bool
    tables: List[ResourceStatus]
    terrain_boxes: List[ResourceStatus]


class Collision(BaseModel):
    """Several active bookings holding the same resource on the same date."""

    date: date
    resource: str  # table, terrain
    resource_id: str
    booking_ids: List[str]
    holders: List[str]
