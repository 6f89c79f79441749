"""Date-selection rules for game nights.

Pure computations: given "today", the schedule exceptions and the active
bookings, decide which dates are offered for booking and which for viewing.
"""
from datetime import date, timedelta
from typing import Iterable, List, Optional

from gamenight.core.config import settings
from gamenight.core.dates import next_weekday, sorted_unique
from gamenight.schemas import BookingInDB, SelectableDate


class AvailabilityCalculator:
    """Derives cadence, bookable and selectable dates."""

    def __init__(
        self,
        weekday: Optional[int] = None,
        count: Optional[int] = None,
        floor: Optional[date] = None,
    ):
        """
        Initialize the calculator.

        Args:
            weekday: Game night weekday (Monday=0)
            count: Number of upcoming game nights to offer
            floor: Earliest date the club accepts bookings for
        """
        self.weekday = settings.CADENCE_WEEKDAY if weekday is None else weekday
        self.count = settings.CADENCE_COUNT if count is None else count
        self.floor = settings.BOOKING_FLOOR_DATE if floor is None else floor

    def upcoming_cadence_dates(self, today: date) -> List[date]:
        """
        Return the next game nights, in order.

        Counting starts from the later of today and the activation floor,
        advanced to the cadence weekday (never rounded back to it).
        """
        first = next_weekday(max(today, self.floor), self.weekday)
        return [first + timedelta(weeks=i) for i in range(self.count)]

    def bookable_dates(
        self,
        today: date,
        special_dates: Iterable[date],
        cancelled_dates: Iterable[date],
    ) -> List[date]:
        """
        Return the dates a member may book.

        Cadence and special-event dates, minus cancelled dates and anything
        before today. A date both special and cancelled is not bookable.
        """
        cancelled = set(cancelled_dates)
        candidates = list(self.upcoming_cadence_dates(today)) + list(special_dates)
        return [
            d for d in sorted_unique(candidates)
            if d not in cancelled and d >= today
        ]

    def selectable_dates(
        self,
        today: date,
        special_dates: Iterable[date],
        bookings: Iterable[BookingInDB],
        cancelled_dates: Iterable[date],
    ) -> List[SelectableDate]:
        """
        Return the dates offered for viewing.

        Cadence dates, special-event dates and every date holding an active
        booking, from today on. Cancelled dates stay in the list, tagged.
        """
        cancelled = set(cancelled_dates)
        booked = [b.date for b in bookings if b.is_active]
        candidates = list(self.upcoming_cadence_dates(today)) + list(special_dates) + booked
        return [
            SelectableDate(date=d, is_cancelled=d in cancelled)
            for d in sorted_unique(candidates)
            if d >= today
        ]

    def is_bookable(
        self,
        today: date,
        day: date,
        special_dates: Iterable[date],
        cancelled_dates: Iterable[date],
    ) -> bool:
        return day in self.bookable_dates(today, special_dates, cancelled_dates)


# Singleton instance
availability_calculator = AvailabilityCalculator()
