"""Play statistics over the booking history."""
from collections import Counter
from datetime import date
from typing import Iterable, Optional

from gamenight.schemas import BookingInDB, BookingStatus, GameCount, StatsResponse


class StatsService:
    """Aggregates bookings per game system."""

    def game_counts(
        self,
        bookings: Iterable[BookingInDB],
        status: Optional[BookingStatus] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        limit: int = 10,
    ) -> StatsResponse:
        """
        Count bookings per game system, most played first.

        Args:
            bookings: Full booking history, cancelled bookings included
            status: Only count bookings with this status
            from_date: First date to include
            to_date: Last date to include
            limit: Maximum number of game systems to return

        Returns:
            Total matching bookings and the top game systems
        """
        selected = [
            b for b in bookings
            if (status is None or b.status == status)
            and (from_date is None or b.date >= from_date)
            and (to_date is None or b.date <= to_date)
        ]

        counts = Counter(b.game_system.strip() for b in selected)
        # Ties keep alphabetical order so results are stable
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]

        return StatsResponse(
            total=len(selected),
            status=status,
            from_date=from_date,
            to_date=to_date,
            games=[GameCount(name=name, count=count) for name, count in ranked],
        )


# Singleton instance
stats_service = StatsService()
