"""Booking conflict resolution and booking writes.

Uniqueness of (date, table) and (date, terrain box) among active bookings is
a soft invariant. It is checked against the caller's latest snapshot just
before a write, but ``commit`` itself never re-checks: each booking is its
own document, so two writers racing for the same slot both succeed. Such
races are reported afterwards by ``find_collisions``.
"""
import logging
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Tuple

from gamenight.core.config import settings
from gamenight.core.dates import utc_now
from gamenight.core.errors import (
    BookingNotFound,
    DateClosed,
    InvalidTransition,
    MembershipInactive,
    MissingField,
    NotPermitted,
    ResourceDisabled,
    SlotTaken,
    UnknownResource,
)
from gamenight.core.ids import is_permanent_booking_id, new_document_id, permanent_booking_id
from gamenight.schemas import (
    BookingCandidate,
    BookingInDB,
    BookingStatus,
    Collision,
    MemberInDB,
)
from gamenight.services.availability_calculator import (
    AvailabilityCalculator,
    availability_calculator,
)
from gamenight.services.club_context import ClubContext

logger = logging.getLogger(__name__)

PERMANENT_MEMBER_ID = "__permanent__"


class Availability:
    """Holders of each table and terrain box on one date."""

    def __init__(
        self,
        day: date,
        tables: Dict[str, BookingInDB],
        terrain: Dict[str, BookingInDB],
    ):
        self.date = day
        self.tables = tables
        self.terrain = terrain

    def table_status(self, table_id: str) -> Tuple[bool, Optional[str]]:
        """Return (free, holder name) for a table."""
        holder = self.tables.get(table_id)
        return (holder is None, holder.member_name if holder else None)

    def terrain_status(self, box_id: str) -> Tuple[bool, Optional[str]]:
        """Return (free, holder name) for a terrain box."""
        holder = self.terrain.get(box_id)
        return (holder is None, holder.member_name if holder else None)


class BookingService:
    """Resolves booking conflicts and performs booking writes."""

    def __init__(
        self,
        calculator: Optional[AvailabilityCalculator] = None,
        permanent_table_id: Optional[str] = None,
        permanent_holder_name: Optional[str] = None,
        permanent_game_system: Optional[str] = None,
    ):
        """
        Initialize the service.

        Args:
            calculator: Date-selection rules (the shared calculator by default)
            permanent_table_id: Table held on every bookable date, if any
            permanent_holder_name: Name shown as the standing holder
            permanent_game_system: Game label of the standing allocation
        """
        self.calculator = calculator or availability_calculator
        self.permanent_table_id = (
            settings.PERMANENT_TABLE_ID if permanent_table_id is None else permanent_table_id
        )
        self.permanent_holder_name = permanent_holder_name or settings.PERMANENT_HOLDER_NAME
        self.permanent_game_system = permanent_game_system or settings.PERMANENT_GAME_SYSTEM

    # --- Reads -------------------------------------------------------------

    def is_bookable(self, context: ClubContext, day: date) -> bool:
        return self.calculator.is_bookable(
            context.today, day, context.special_dates, context.cancelled_dates
        )

    def permanent_booking(self, context: ClubContext, day: date) -> Optional[BookingInDB]:
        """Return the standing allocation for ``day``, or None if the date is not bookable."""
        if not self.permanent_table_id or not self.is_bookable(context, day):
            return None

        return BookingInDB(
            id=permanent_booking_id(self.permanent_table_id, day),
            date=day,
            table_id=self.permanent_table_id,
            member_id=PERMANENT_MEMBER_ID,
            member_name=self.permanent_holder_name,
            game_system=self.permanent_game_system,
            player_count=0,
            created_at=utc_now(),
            permanent=True,
        )

    def bookings_for_date(
        self, context: ClubContext, day: date, include_cancelled: bool = False
    ) -> List[BookingInDB]:
        """Return a date's bookings, with the standing allocation first when present."""
        bookings = [
            b for b in context.bookings
            if b.date == day and (include_cancelled or b.is_active)
        ]
        permanent = self.permanent_booking(context, day)
        return ([permanent] if permanent else []) + bookings

    def availability(
        self,
        context: ClubContext,
        day: date,
        excluding_id: Optional[str] = None,
    ) -> Availability:
        """
        Map each held table and terrain box on ``day`` to its holder.

        Args:
            context: Latest club snapshot
            day: Date to inspect
            excluding_id: Booking being edited; it never blocks itself

        Returns:
            Availability for the date
        """
        tables: Dict[str, BookingInDB] = {}
        terrain: Dict[str, BookingInDB] = {}

        for booking in self.bookings_for_date(context, day):
            if booking.id == excluding_id:
                continue
            tables[booking.table_id] = booking
            if booking.terrain_box_id:
                terrain[booking.terrain_box_id] = booking

        return Availability(day, tables, terrain)

    # --- Checks ------------------------------------------------------------

    def validate(
        self,
        candidate: BookingCandidate,
        cancelled_dates,
        requester_is_member: bool,
    ):
        """
        Check a candidate before any write.

        Raises:
            DateClosed: The date is cancelled
            MembershipInactive: The requester cannot book
            MissingField: No table or no game system given
        """
        if candidate.date in set(cancelled_dates):
            raise DateClosed("This date has been cancelled. Bookings are not allowed.")
        if not requester_is_member:
            raise MembershipInactive("Your membership is not active. Please contact an admin.")
        if not candidate.table_id:
            raise MissingField("table_id", "Please select a table.")
        if not candidate.game_system or not candidate.game_system.strip():
            raise MissingField("game_system", "Please enter a game system.")

    def ensure_selectable(
        self,
        context: ClubContext,
        candidate: BookingCandidate,
        previous: Optional[BookingInDB] = None,
    ):
        """
        Check the chosen table and terrain box against the latest snapshot.

        Args:
            context: Latest club snapshot
            candidate: Booking about to be committed
            previous: Stored version of the booking when editing

        Raises:
            UnknownResource: The table or terrain box does not exist
            ResourceDisabled: A disabled terrain box is newly chosen
            SlotTaken: Another booking holds the table or terrain box
        """
        if context.get_table(candidate.table_id) is None:
            raise UnknownResource(f"Table {candidate.table_id} does not exist")

        box = None
        if candidate.terrain_box_id:
            box = context.get_terrain_box(candidate.terrain_box_id)
            if box is None:
                raise UnknownResource(f"Terrain box {candidate.terrain_box_id} does not exist")
            kept = previous is not None and previous.terrain_box_id == box.id
            if box.disabled and not kept:
                raise ResourceDisabled(f"Terrain box {box.id} is not available for booking")

        availability = self.availability(context, candidate.date, excluding_id=candidate.id)

        free, holder = availability.table_status(candidate.table_id)
        if not free:
            raise SlotTaken("Table", candidate.table_id, holder)

        if box is not None:
            free, holder = availability.terrain_status(box.id)
            if not free:
                raise SlotTaken("Terrain box", box.id, holder)

    def ensure_can_modify(self, booking_id: str, booking: Optional[BookingInDB], member: MemberInDB):
        """
        Check that ``member`` may edit or cancel a booking.

        Only the owner or an admin may, only while they are a member, and
        only while the booking is active.
        """
        if is_permanent_booking_id(booking_id):
            raise NotPermitted("The standing table allocation cannot be changed")
        if booking is None:
            raise BookingNotFound(f"Booking {booking_id} not found")
        if not member.is_member:
            raise MembershipInactive("Your membership is not active. Please contact an admin.")
        if booking.member_id != member.id and not member.is_admin:
            raise NotPermitted("You can only change your own bookings")
        if not booking.is_active:
            raise InvalidTransition(f"Booking {booking_id} is cancelled and cannot be changed")

    # --- Writes ------------------------------------------------------------

    async def commit(self, store, candidate: BookingCandidate) -> BookingInDB:
        """
        Write a booking as a single document keyed by its id.

        A new id is assigned on creation and kept on edit, along with the
        original creation time. Conflicts are not re-checked here.

        Raises:
            NotPermitted: The id belongs to the standing allocation
            InvalidTransition: The booking was cancelled
            WriteFailed: The store rejected the write
        """
        booking_id = candidate.id or new_document_id()
        if is_permanent_booking_id(booking_id):
            raise NotPermitted("The standing table allocation cannot be changed")

        existing = await store.get("bookings", booking_id) if candidate.id else None
        if existing is not None and not existing.is_active:
            raise InvalidTransition(f"Booking {booking_id} is cancelled and cannot be edited")

        if existing is not None:
            created_at = existing.created_at
        else:
            created_at = candidate.created_at or utc_now()

        data = {
            "date": candidate.date,
            "table_id": candidate.table_id,
            "terrain_box_id": candidate.terrain_box_id or None,
            "member_id": candidate.member_id,
            "member_name": candidate.member_name,
            "game_system": candidate.game_system.strip() if candidate.game_system else candidate.game_system,
            "player_count": candidate.player_count,
            "created_at": created_at,
            "status": (candidate.status or BookingStatus.ACTIVE).value,
        }

        booking = await store.set("bookings", booking_id, data)
        action = "Updated" if existing is not None else "Created"
        logger.info(
            f"{action} booking {booking_id}: table {booking.table_id} on {booking.date} "
            f"for {booking.member_name}"
        )
        return booking

    async def cancel(self, store, booking_id: str, canceller_id: str) -> BookingInDB:
        """
        Mark a booking cancelled. The document is kept for statistics.

        Raises:
            NotPermitted: The id belongs to the standing allocation
            BookingNotFound: No such booking
            InvalidTransition: Already cancelled
        """
        if is_permanent_booking_id(booking_id):
            raise NotPermitted("The standing table allocation cannot be cancelled")

        existing = await store.get("bookings", booking_id)
        if existing is None:
            raise BookingNotFound(f"Booking {booking_id} not found")
        if not existing.is_active:
            raise InvalidTransition(f"Booking {booking_id} is already cancelled")

        booking = await store.update(
            "bookings",
            booking_id,
            {
                "status": BookingStatus.CANCELLED.value,
                "cancelled_at": utc_now(),
                "cancelled_by": canceller_id,
            },
        )
        if booking is None:
            raise BookingNotFound(f"Booking {booking_id} not found")

        logger.info(f"Cancelled booking {booking_id} (by {canceller_id})")
        return booking

    async def delete(self, store, booking_id: str):
        """Remove a booking document entirely (admin tooling only)."""
        if is_permanent_booking_id(booking_id):
            raise NotPermitted("The standing table allocation cannot be deleted")
        if not await store.delete("bookings", booking_id):
            raise BookingNotFound(f"Booking {booking_id} not found")
        logger.warning(f"Hard-deleted booking {booking_id}")

    # --- Race detection ----------------------------------------------------

    def find_collisions(
        self, context: ClubContext, from_date: Optional[date] = None
    ) -> List[Collision]:
        """
        Report resources held by more than one active booking on a date.

        The standing allocation counts as a holder on bookable dates.
        """
        days = sorted({b.date for b in context.active_bookings})
        if from_date is not None:
            days = [d for d in days if d >= from_date]

        collisions = []
        for day in days:
            holders: Dict[Tuple[str, str], List[BookingInDB]] = defaultdict(list)
            for booking in self.bookings_for_date(context, day):
                holders[("table", booking.table_id)].append(booking)
                if booking.terrain_box_id:
                    holders[("terrain", booking.terrain_box_id)].append(booking)

            for (resource, resource_id), bookings in sorted(holders.items()):
                if len(bookings) < 2:
                    continue
                collisions.append(
                    Collision(
                        date=day,
                        resource=resource,
                        resource_id=resource_id,
                        booking_ids=[b.id for b in bookings],
                        holders=[b.member_name for b in bookings],
                    )
                )

        return collisions


# Singleton instance
booking_service = BookingService()
