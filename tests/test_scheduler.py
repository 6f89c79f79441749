"""
Tests for the background double booking sweep.
"""

import asyncio
from datetime import date

from gamenight.core.config import settings
from gamenight.schemas import BookingCandidate
from gamenight.services.booking_service import booking_service
from gamenight.services.scheduler import CollisionSweep


def candidate(member_id, day=date(2026, 3, 10), table_id="L1"):
    return BookingCandidate(
        date=day,
        table_id=table_id,
        member_id=member_id,
        member_name=member_id.title(),
        game_system="Kill Team",
    )


def test_sweep_reports_double_bookings(store, frozen_today):
    sweep = CollisionSweep()
    sweep.store = store

    async def scenario():
        await booking_service.commit(store, candidate("alice"))
        await booking_service.commit(store, candidate("bob"))
        await booking_service.commit(store, candidate("carol", table_id="L2"))
        return await sweep.sweep()

    collisions = asyncio.run(scenario())

    assert len(collisions) == 1
    assert collisions[0].resource_id == "L1"
    assert sweep.last_collisions == collisions
    assert sweep.last_run_at is not None


def test_sweep_ignores_past_dates(store, frozen_today):
    sweep = CollisionSweep()
    sweep.store = store

    async def scenario():
        await booking_service.commit(store, candidate("alice", day=date(2026, 3, 3)))
        await booking_service.commit(store, candidate("bob", day=date(2026, 3, 3)))
        return await sweep.sweep()

    assert asyncio.run(scenario()) == []


def test_start_and_stop(store, monkeypatch):
    monkeypatch.setattr(settings, "COLLISION_CHECK_MINUTES", 15)
    sweep = CollisionSweep()

    async def scenario():
        await sweep.start(store)
        job = sweep.scheduler.get_job("collision_sweep")
        running = sweep.running
        await sweep.stop()
        return job, running

    job, running = asyncio.run(scenario())

    assert job is not None
    assert running is True
    assert sweep.running is False
