"""
Tests for play statistics.
"""

from datetime import date, datetime

from gamenight.schemas import BookingInDB, BookingStatus
from gamenight.services.stats_service import StatsService


def make_booking(booking_id, game_system, day=date(2026, 3, 10), status=BookingStatus.ACTIVE):
    return BookingInDB(
        id=booking_id,
        date=day,
        table_id="L1",
        member_id="m1",
        member_name="Alice",
        game_system=game_system,
        player_count=2,
        created_at=datetime(2026, 3, 1, 18, 0),
        status=status,
    )


HISTORY = [
    make_booking("b1", "Kill Team"),
    make_booking("b2", "Kill Team "),
    make_booking("b3", "Warhammer 40k"),
    make_booking("b4", "Bolt Action", status=BookingStatus.CANCELLED),
    make_booking("b5", "Bolt Action", day=date(2026, 4, 7)),
    make_booking("b6", "Kill Team", day=date(2026, 4, 7), status=BookingStatus.CANCELLED),
]


class TestGameCounts:
    """Tests for per-game booking counts."""

    def test_counts_cancelled_bookings_by_default(self):
        stats = StatsService().game_counts(HISTORY)

        assert stats.total == 6
        assert [(g.name, g.count) for g in stats.games] == [
            ("Kill Team", 3),
            ("Bolt Action", 2),
            ("Warhammer 40k", 1),
        ]

    def test_status_filter(self):
        stats = StatsService().game_counts(HISTORY, status=BookingStatus.ACTIVE)

        assert stats.total == 4
        assert stats.games[0].name == "Kill Team"
        assert stats.games[0].count == 2

    def test_date_range(self):
        stats = StatsService().game_counts(
            HISTORY, from_date=date(2026, 4, 1), to_date=date(2026, 4, 30)
        )

        assert stats.total == 2
        assert [(g.name, g.count) for g in stats.games] == [("Bolt Action", 1), ("Kill Team", 1)]

    def test_limit(self):
        stats = StatsService().game_counts(HISTORY, limit=1)

        assert len(stats.games) == 1
        assert stats.total == 6

    def test_empty_history(self):
        stats = StatsService().game_counts([])

        assert stats.total == 0
        assert stats.games == []
