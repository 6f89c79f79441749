"""Game night date endpoints."""
from fastapi import APIRouter, Depends

from gamenight.api.deps import get_context, get_store
from gamenight.api.streaming import event_stream, format_event
from gamenight.core import dates
from gamenight.schemas import DateListResponse, SelectableDatesResponse
from gamenight.services.availability_calculator import availability_calculator
from gamenight.services.club_context import ClubContext
from gamenight.services.document_store import DocumentStore

router = APIRouter(prefix="/dates", tags=["dates"])


def _selectable(context: ClubContext) -> SelectableDatesResponse:
    return SelectableDatesResponse(
        today=context.today,
        dates=availability_calculator.selectable_dates(
            context.today,
            context.special_dates,
            context.bookings,
            context.cancelled_dates,
        ),
    )


@router.get("/cadence", response_model=DateListResponse)
async def get_cadence_dates(context: ClubContext = Depends(get_context)):
    """
    Get the upcoming regular game nights.

    Cancelled dates are included; use /dates/bookable for what can be booked.
    """
    return DateListResponse(
        today=context.today,
        dates=availability_calculator.upcoming_cadence_dates(context.today),
    )


@router.get("/bookable", response_model=DateListResponse)
async def get_bookable_dates(context: ClubContext = Depends(get_context)):
    """
    Get the dates a member may book.

    Regular game nights and special events from today on, without cancelled dates.
    """
    return DateListResponse(
        today=context.today,
        dates=availability_calculator.bookable_dates(
            context.today, context.special_dates, context.cancelled_dates
        ),
    )


@router.get("/selectable", response_model=SelectableDatesResponse)
async def get_selectable_dates(context: ClubContext = Depends(get_context)):
    """
    Get the dates offered for viewing.

    Includes cancelled dates (tagged) and any date that already has bookings.
    """
    return _selectable(context)


@router.get("/selectable/stream")
async def stream_selectable_dates(store: DocumentStore = Depends(get_store)):
    """
    Stream the selectable dates as server-sent events.

    A new event is sent whenever the bookings or the schedule change.
    """

    async def events():
        latest = {}
        async for snapshot in store.subscribe("bookings", "schedule"):
            latest[snapshot.collection] = snapshot.documents
            if len(latest) < 2:
                continue
            context = ClubContext.build(
                today=dates.today(),
                bookings=latest["bookings"],
                schedule=latest["schedule"],
            )
            yield format_event("dates", _selectable(context))

    return event_stream(events())
