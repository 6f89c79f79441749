"""Schedule exception endpoints (cancelled and special-event dates)."""
import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from gamenight.api.deps import get_context, get_store, require_admin, to_http_exception
from gamenight.core.errors import BookingError
from gamenight.core.ids import schedule_document_id
from gamenight.schemas import MemberInDB, ScheduleDatesUpdate, ScheduleKind, ScheduleResponse
from gamenight.services.club_context import ClubContext
from gamenight.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["schedule"])


def _response(context: ClubContext) -> ScheduleResponse:
    return ScheduleResponse(
        cancelled_dates=context.cancelled_dates,
        special_dates=context.special_dates,
    )


@router.get("", response_model=ScheduleResponse)
async def get_schedule(context: ClubContext = Depends(get_context)):
    """Get the cancelled and special-event date sets."""
    return _response(context)


@router.put("/{kind}", response_model=ScheduleResponse)
async def replace_schedule_dates(
    kind: ScheduleKind,
    update: ScheduleDatesUpdate,
    store: DocumentStore = Depends(get_store),
    context: ClubContext = Depends(get_context),
    admin: MemberInDB = Depends(require_admin),
):
    """
    Replace one schedule exception set.

    Each date is its own document, so the set is changed one date at a time.

    Args:
        kind: cancelled or special
        update: The complete new set of dates
    """
    current = set(context.cancelled_dates if kind == ScheduleKind.CANCELLED else context.special_dates)
    wanted = set(update.dates)

    try:
        for day in sorted(current - wanted):
            await store.delete("schedule", schedule_document_id(kind.value, day))
        for day in sorted(wanted - current):
            await store.set(
                "schedule",
                schedule_document_id(kind.value, day),
                {"kind": kind.value, "date": day},
            )
    except BookingError as e:
        raise to_http_exception(e)

    logger.info(f"{admin.id} set {kind.value} dates to {sorted(wanted)}")
    if kind == ScheduleKind.CANCELLED:
        return ScheduleResponse(cancelled_dates=sorted(wanted), special_dates=context.special_dates)
    return ScheduleResponse(cancelled_dates=context.cancelled_dates, special_dates=sorted(wanted))


@router.post("/{kind}/{day}", status_code=201)
async def add_schedule_date(
    kind: ScheduleKind,
    day: date,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """Add one date to a schedule exception set."""
    try:
        await store.set(
            "schedule",
            schedule_document_id(kind.value, day),
            {"kind": kind.value, "date": day},
        )
    except BookingError as e:
        raise to_http_exception(e)

    logger.info(f"{admin.id} added {kind.value} date {day}")
    return {"kind": kind.value, "date": day}


@router.delete("/{kind}/{day}", status_code=204)
async def remove_schedule_date(
    kind: ScheduleKind,
    day: date,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """Remove one date from a schedule exception set."""
    try:
        deleted = await store.delete("schedule", schedule_document_id(kind.value, day))
    except BookingError as e:
        raise to_http_exception(e)

    if not deleted:
        raise HTTPException(status_code=404, detail=f"{day} is not a {kind.value} date")

    logger.info(f"{admin.id} removed {kind.value} date {day}")
