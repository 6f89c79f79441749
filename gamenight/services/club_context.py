"""Snapshot of the club's collections handed to the booking logic."""
from datetime import date
from typing import Iterable, List, Optional

from pydantic import BaseModel

from gamenight.schemas import (
    BookingInDB,
    ScheduleDateInDB,
    ScheduleKind,
    TableInDB,
    TerrainBoxInDB,
)


class ClubContext(BaseModel):
    """
    Everything the availability calculator and booking resolver read.

    Built fresh from complete collection snapshots on every use; nothing in
    it is carried over from an earlier snapshot.
    """

    today: date
    bookings: List[BookingInDB] = []
    tables: List[TableInDB] = []
    terrain_boxes: List[TerrainBoxInDB] = []
    cancelled_dates: List[date] = []
    special_dates: List[date] = []

    @classmethod
    def build(
        cls,
        today: date,
        bookings: Iterable[BookingInDB] = (),
        tables: Iterable[TableInDB] = (),
        terrain_boxes: Iterable[TerrainBoxInDB] = (),
        schedule: Iterable[ScheduleDateInDB] = (),
    ) -> "ClubContext":
        schedule = list(schedule)
        return cls(
            today=today,
            bookings=list(bookings),
            tables=list(tables),
            terrain_boxes=list(terrain_boxes),
            cancelled_dates=sorted(s.date for s in schedule if s.kind == ScheduleKind.CANCELLED),
            special_dates=sorted(s.date for s in schedule if s.kind == ScheduleKind.SPECIAL),
        )

    @property
    def active_bookings(self) -> List[BookingInDB]:
        return [b for b in self.bookings if b.is_active]

    def get_table(self, table_id: str) -> Optional[TableInDB]:
        return next((t for t in self.tables if t.id == table_id), None)

    def get_terrain_box(self, box_id: str) -> Optional[TerrainBoxInDB]:
        return next((t for t in self.terrain_boxes if t.id == box_id), None)

    def get_booking(self, booking_id: str) -> Optional[BookingInDB]:
        return next((b for b in self.bookings if b.id == booking_id), None)


async def load_context(store, today: date) -> ClubContext:
    """Read every collection the booking logic needs from the store."""
    return ClubContext.build(
        today=today,
        bookings=await store.list("bookings"),
        tables=await store.list("tables"),
        terrain_boxes=await store.list("terrain_boxes"),
        schedule=await store.list("schedule"),
    )
