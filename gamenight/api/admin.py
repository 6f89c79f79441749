"""Admin reporting endpoints."""
from typing import List

from fastapi import APIRouter, Depends

from gamenight.api.deps import get_context, require_admin
from gamenight.schemas import Collision, MemberInDB
from gamenight.services.booking_service import booking_service
from gamenight.services.club_context import ClubContext

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/collisions", response_model=List[Collision])
async def list_collisions(
    include_past: bool = False,
    context: ClubContext = Depends(get_context),
    admin: MemberInDB = Depends(require_admin),
):
    """
    List tables and terrain boxes held by more than one active booking.

    Bookings made at the same instant are never rejected, so this is where
    double bookings surface. Resolve each by cancelling one of the bookings.
    """
    return booking_service.find_collisions(
        context, from_date=None if include_past else context.today
    )
