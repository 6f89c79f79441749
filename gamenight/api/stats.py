"""Play statistics endpoints."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from gamenight.api.deps import get_context
from gamenight.schemas import BookingStatus, StatsResponse
from gamenight.services.club_context import ClubContext
from gamenight.services.stats_service import stats_service

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def get_stats(
    status: Optional[BookingStatus] = Query(default=None, description="Only count bookings with this status"),
    from_date: Optional[date] = Query(default=None, description="First date to include"),
    to_date: Optional[date] = Query(default=None, description="Last date to include"),
    limit: int = Query(default=10, ge=1, le=50),
    context: ClubContext = Depends(get_context),
):
    """
    Get the most played game systems.

    Cancelled bookings are counted unless a status filter is given.
    """
    if from_date and to_date and from_date > to_date:
        raise HTTPException(
            status_code=400,
            detail="from_date must be before or equal to to_date",
        )

    return stats_service.game_counts(
        context.bookings,
        status=status,
        from_date=from_date,
        to_date=to_date,
        limit=limit,
    )
