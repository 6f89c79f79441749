"""Booking endpoints."""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from gamenight.api.deps import (
    get_context,
    get_current_member,
    get_store,
    require_admin,
    to_http_exception,
)
from gamenight.api.streaming import event_stream, format_event
from gamenight.core.errors import BookingError, DateUnavailable
from gamenight.schemas import (
    AvailabilityResponse,
    BookingCandidate,
    BookingInDB,
    BookingRequest,
    MemberInDB,
    ResourceStatus,
)
from gamenight.services.booking_service import booking_service
from gamenight.services.club_context import ClubContext
from gamenight.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _check_date_open(context: ClubContext, day: date, previous: Optional[BookingInDB] = None):
    """Only bookable dates may be chosen, except an edit keeping its date."""
    if previous is not None and previous.date == day:
        return
    if not booking_service.is_bookable(context, day):
        raise DateUnavailable(f"{day} is not open for booking")


@router.get("", response_model=List[BookingInDB])
async def list_bookings(
    day: Optional[date] = Query(default=None, alias="date", description="Only bookings on this date"),
    include_cancelled: bool = Query(default=False),
    context: ClubContext = Depends(get_context),
):
    """
    List bookings.

    With a date, the standing table allocation is included when the date is
    bookable. Without one, every stored booking is returned.
    """
    if day is not None:
        return booking_service.bookings_for_date(context, day, include_cancelled=include_cancelled)

    if include_cancelled:
        return context.bookings
    return context.active_bookings


@router.get("/availability", response_model=AvailabilityResponse)
async def get_availability(
    day: date = Query(..., alias="date"),
    excluding_id: Optional[str] = Query(default=None, description="Booking being edited"),
    context: ClubContext = Depends(get_context),
):
    """
    Get which tables and terrain boxes are free on a date.

    Holder names are for display only.

    Args:
        day: Date to inspect
        excluding_id: Booking being edited; it does not block its own slot
    """
    availability = booking_service.availability(context, day, excluding_id=excluding_id)

    tables = []
    for table in context.tables:
        free, holder = availability.table_status(table.id)
        booking = availability.tables.get(table.id)
        tables.append(
            ResourceStatus(
                id=table.id,
                name=table.name,
                free=free,
                holder_name=holder,
                booking_id=booking.id if booking else None,
            )
        )

    terrain_boxes = []
    for box in context.terrain_boxes:
        free, holder = availability.terrain_status(box.id)
        booking = availability.terrain.get(box.id)
        terrain_boxes.append(
            ResourceStatus(
                id=box.id,
                name=box.name,
                free=free,
                holder_name=holder,
                booking_id=booking.id if booking else None,
                disabled=box.disabled,
            )
        )

    return AvailabilityResponse(
        date=day,
        is_bookable=booking_service.is_bookable(context, day),
        is_cancelled=day in context.cancelled_dates,
        tables=tables,
        terrain_boxes=terrain_boxes,
    )


@router.get("/stream")
async def stream_bookings(store: DocumentStore = Depends(get_store)):
    """Stream the full booking collection as server-sent events on every change."""

    async def events():
        async for snapshot in store.subscribe("bookings"):
            yield format_event("bookings", snapshot)

    return event_stream(events())


@router.post("", response_model=BookingInDB, status_code=201)
async def create_booking(
    request: BookingRequest,
    store: DocumentStore = Depends(get_store),
    context: ClubContext = Depends(get_context),
    member: MemberInDB = Depends(get_current_member),
):
    """
    Book a table (and optionally a terrain box) for a game night.

    The table and terrain box are checked against the latest bookings just
    before saving. Two members booking the same slot at the same instant
    can both succeed; such double bookings show up in /admin/collisions.
    """
    candidate = BookingCandidate(
        date=request.date,
        table_id=request.table_id,
        terrain_box_id=request.terrain_box_id,
        member_id=member.id,
        member_name=member.name,
        game_system=request.game_system,
        player_count=request.player_count,
    )

    try:
        booking_service.validate(candidate, context.cancelled_dates, member.is_member)
        _check_date_open(context, candidate.date)
        booking_service.ensure_selectable(context, candidate)
        return await booking_service.commit(store, candidate)
    except BookingError as e:
        logger.info(f"Booking by {member.id} rejected: {e.message}")
        raise to_http_exception(e)


@router.put("/{booking_id}", response_model=BookingInDB)
async def update_booking(
    booking_id: str,
    request: BookingRequest,
    store: DocumentStore = Depends(get_store),
    context: ClubContext = Depends(get_context),
    member: MemberInDB = Depends(get_current_member),
):
    """
    Edit a booking. The id, owner and creation time are kept.

    Only the owner or an admin may edit.
    """
    previous = context.get_booking(booking_id)

    try:
        booking_service.ensure_can_modify(booking_id, previous, member)
        candidate = BookingCandidate(
            id=booking_id,
            date=request.date,
            table_id=request.table_id,
            terrain_box_id=request.terrain_box_id,
            member_id=previous.member_id,
            member_name=previous.member_name,
            game_system=request.game_system,
            player_count=request.player_count,
        )
        booking_service.validate(candidate, context.cancelled_dates, member.is_member)
        _check_date_open(context, candidate.date, previous)
        booking_service.ensure_selectable(context, candidate, previous)
        return await booking_service.commit(store, candidate)
    except BookingError as e:
        logger.info(f"Edit of booking {booking_id} by {member.id} rejected: {e.message}")
        raise to_http_exception(e)


@router.post("/{booking_id}/cancel", response_model=BookingInDB)
async def cancel_booking(
    booking_id: str,
    store: DocumentStore = Depends(get_store),
    context: ClubContext = Depends(get_context),
    member: MemberInDB = Depends(get_current_member),
):
    """
    Cancel a booking.

    The booking is kept with status cancelled so play statistics stay intact.
    """
    try:
        booking_service.ensure_can_modify(booking_id, context.get_booking(booking_id), member)
        return await booking_service.cancel(store, booking_id, member.id)
    except BookingError as e:
        raise to_http_exception(e)


@router.delete("/{booking_id}", status_code=204)
async def delete_booking(
    booking_id: str,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """
    Permanently delete a booking (admin only).

    Members cancel instead; deleting removes the booking from statistics.
    """
    try:
        await booking_service.delete(store, booking_id)
    except BookingError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete booking: {str(e)}")

    logger.info(f"Booking {booking_id} deleted by admin {admin.id}")
