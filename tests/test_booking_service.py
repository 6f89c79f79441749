"""
Tests for booking conflict resolution and booking writes.
"""

import asyncio
from datetime import date, datetime

import pytest

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
from gamenight.schemas import (
    BookingCandidate,
    BookingInDB,
    BookingStatus,
    MemberInDB,
    ScheduleDateInDB,
    ScheduleKind,
    TableInDB,
    TerrainBoxInDB,
)
from gamenight.services.availability_calculator import AvailabilityCalculator
from gamenight.services.booking_service import PERMANENT_MEMBER_ID, BookingService
from gamenight.services.club_context import ClubContext, load_context

TODAY = date(2026, 3, 4)
NEXT_NIGHT = date(2026, 3, 10)


def make_booking(booking_id, table_id="L1", terrain_box_id=None, day=NEXT_NIGHT,
                 status=BookingStatus.ACTIVE, member_id="m1", member_name="Alice"):
    return BookingInDB(
        id=booking_id,
        date=day,
        table_id=table_id,
        terrain_box_id=terrain_box_id,
        member_id=member_id,
        member_name=member_name,
        game_system="Kill Team",
        player_count=2,
        created_at=datetime(2026, 3, 1, 18, 0),
        status=status,
    )


def make_candidate(**overrides):
    fields = {
        "date": NEXT_NIGHT,
        "table_id": "L1",
        "member_id": "m2",
        "member_name": "Bob",
        "game_system": "Warhammer 40k",
    }
    fields.update(overrides)
    return BookingCandidate(**fields)


def make_member(member_id="m1", is_member=True, is_admin=False):
    return MemberInDB(
        id=member_id,
        email=f"{member_id}@example.com",
        name=member_id,
        is_member=is_member,
        is_admin=is_admin,
    )


def make_context(bookings=(), schedule=()):
    return ClubContext.build(
        today=TODAY,
        bookings=bookings,
        tables=[
            TableInDB(id="L1", name="Large Table 1", size="6x4"),
            TableInDB(id="L2", name="Large Table 2", size="6x4"),
            TableInDB(id="L13", name="Large Table 13", size="6x4"),
        ],
        terrain_boxes=[
            TerrainBoxInDB(id="SCIFI-1", name="Sci-Fi Box 1", category="Sci-Fi", image_url="/a.jpg"),
            TerrainBoxInDB(
                id="HIST-1", name="Historical Box 1", category="Historical",
                image_url="/b.jpg", disabled=True,
            ),
        ],
        schedule=schedule,
    )


@pytest.fixture
def service():
    return BookingService(
        calculator=AvailabilityCalculator(weekday=1, count=8, floor=date(2026, 3, 1)),
        permanent_table_id="L13",
        permanent_holder_name="Club Committee",
        permanent_game_system="Club Use",
    )


class TestAvailability:
    """Tests for who holds which table and terrain box."""

    def test_permanent_table_is_held_on_bookable_date(self, service):
        availability = service.availability(make_context(), NEXT_NIGHT)

        assert availability.table_status("L13") == (False, "Club Committee")
        assert availability.table_status("L1") == (True, None)

    def test_permanent_table_is_free_on_non_bookable_date(self, service):
        availability = service.availability(make_context(), date(2026, 3, 11))

        assert availability.table_status("L13") == (True, None)

    def test_permanent_table_is_free_on_cancelled_date(self, service):
        schedule = [ScheduleDateInDB(id="c", kind=ScheduleKind.CANCELLED, date=NEXT_NIGHT)]

        availability = service.availability(make_context(schedule=schedule), NEXT_NIGHT)

        assert availability.table_status("L13") == (True, None)

    def test_active_booking_holds_table_and_terrain(self, service):
        context = make_context([make_booking("b1", terrain_box_id="SCIFI-1")])

        availability = service.availability(context, NEXT_NIGHT)

        assert availability.table_status("L1") == (False, "Alice")
        assert availability.terrain_status("SCIFI-1") == (False, "Alice")

    def test_cancelled_booking_frees_table(self, service):
        context = make_context([make_booking("b1", status=BookingStatus.CANCELLED)])

        availability = service.availability(context, NEXT_NIGHT)

        assert availability.table_status("L1") == (True, None)

    def test_booking_being_edited_does_not_block_itself(self, service):
        context = make_context([make_booking("b1", terrain_box_id="SCIFI-1")])

        availability = service.availability(context, NEXT_NIGHT, excluding_id="b1")

        assert availability.table_status("L1") == (True, None)
        assert availability.terrain_status("SCIFI-1") == (True, None)

    def test_bookings_for_date_lists_permanent_first(self, service):
        context = make_context([make_booking("b1")])

        bookings = service.bookings_for_date(context, NEXT_NIGHT)

        assert bookings[0].permanent is True
        assert bookings[0].id == "permanent-L13-2026-03-10"
        assert bookings[0].member_id == PERMANENT_MEMBER_ID
        assert [b.id for b in bookings[1:]] == ["b1"]


class TestValidate:
    """Tests for candidate validation."""

    def test_valid_candidate_passes(self, service):
        service.validate(make_candidate(), [], True)

    def test_cancelled_date_is_checked_first(self, service):
        candidate = make_candidate(table_id=None, game_system=None)

        with pytest.raises(DateClosed):
            service.validate(candidate, [NEXT_NIGHT], False)

    def test_non_member_is_rejected(self, service):
        with pytest.raises(MembershipInactive):
            service.validate(make_candidate(table_id=None), [], False)

    def test_missing_table(self, service):
        with pytest.raises(MissingField) as exc_info:
            service.validate(make_candidate(table_id=None, game_system=None), [], True)

        assert exc_info.value.field == "table_id"

    def test_blank_game_system(self, service):
        with pytest.raises(MissingField) as exc_info:
            service.validate(make_candidate(game_system="   "), [], True)

        assert exc_info.value.field == "game_system"


class TestEnsureSelectable:
    """Tests for the pre-write check against the latest snapshot."""

    def test_free_slot_passes(self, service):
        service.ensure_selectable(make_context(), make_candidate(terrain_box_id="SCIFI-1"))

    def test_permanent_table_is_taken(self, service):
        with pytest.raises(SlotTaken) as exc_info:
            service.ensure_selectable(make_context(), make_candidate(table_id="L13"))

        assert exc_info.value.holder == "Club Committee"
        assert exc_info.value.status_code == 409

    def test_table_held_by_another_booking(self, service):
        context = make_context([make_booking("b1")])

        with pytest.raises(SlotTaken):
            service.ensure_selectable(context, make_candidate())

    def test_terrain_held_by_another_booking(self, service):
        context = make_context([make_booking("b1", table_id="L2", terrain_box_id="SCIFI-1")])

        with pytest.raises(SlotTaken) as exc_info:
            service.ensure_selectable(context, make_candidate(terrain_box_id="SCIFI-1"))

        assert exc_info.value.resource == "Terrain box"

    def test_unknown_table(self, service):
        with pytest.raises(UnknownResource):
            service.ensure_selectable(make_context(), make_candidate(table_id="X9"))

    def test_unknown_terrain_box(self, service):
        with pytest.raises(UnknownResource):
            service.ensure_selectable(make_context(), make_candidate(terrain_box_id="NOPE"))

    def test_disabled_terrain_box_cannot_be_chosen(self, service):
        with pytest.raises(ResourceDisabled):
            service.ensure_selectable(make_context(), make_candidate(terrain_box_id="HIST-1"))

    def test_edit_may_keep_disabled_terrain_box(self, service):
        previous = make_booking("b1", terrain_box_id="HIST-1")
        context = make_context([previous])
        candidate = make_candidate(id="b1", terrain_box_id="HIST-1", member_id="m1")

        service.ensure_selectable(context, candidate, previous)


class TestEnsureCanModify:
    """Tests for who may edit or cancel a booking."""

    def test_owner_may_modify(self, service):
        service.ensure_can_modify("b1", make_booking("b1"), make_member("m1"))

    def test_admin_may_modify_any_booking(self, service):
        service.ensure_can_modify("b1", make_booking("b1"), make_member("admin", is_admin=True))

    def test_other_member_may_not(self, service):
        with pytest.raises(NotPermitted):
            service.ensure_can_modify("b1", make_booking("b1"), make_member("m2"))

    def test_lapsed_owner_may_not(self, service):
        with pytest.raises(MembershipInactive):
            service.ensure_can_modify("b1", make_booking("b1"), make_member("m1", is_member=False))

    def test_permanent_booking_may_not_be_modified(self, service):
        with pytest.raises(NotPermitted):
            service.ensure_can_modify(
                "permanent-L13-2026-03-10", None, make_member("admin", is_admin=True)
            )

    def test_missing_booking(self, service):
        with pytest.raises(BookingNotFound):
            service.ensure_can_modify("b404", None, make_member("m1"))

    def test_cancelled_booking_may_not_be_modified(self, service):
        booking = make_booking("b1", status=BookingStatus.CANCELLED)

        with pytest.raises(InvalidTransition):
            service.ensure_can_modify("b1", booking, make_member("m1"))


class TestCommit:
    """Tests for booking writes."""

    def test_create_assigns_id_and_active_status(self, service, store):
        booking = asyncio.run(service.commit(store, make_candidate(game_system="  Kill Team ")))

        assert booking.id
        assert booking.status == BookingStatus.ACTIVE
        assert booking.game_system == "Kill Team"
        assert booking.member_name == "Bob"

    def test_edit_keeps_id_and_created_at(self, service, store):
        async def scenario():
            created = await service.commit(store, make_candidate())
            edited = await service.commit(
                store, make_candidate(id=created.id, table_id="L2", player_count=4)
            )
            return created, edited, await store.list("bookings")

        created, edited, stored = asyncio.run(scenario())

        assert edited.id == created.id
        assert edited.created_at == created.created_at
        assert edited.table_id == "L2"
        assert len(stored) == 1

    def test_commit_twice_with_same_id_is_one_booking(self, service, store):
        async def scenario():
            candidate = make_candidate(id="b1")
            await service.commit(store, candidate)
            await service.commit(store, candidate)
            return await store.list("bookings")

        stored = asyncio.run(scenario())

        assert [b.id for b in stored] == ["b1"]

    def test_different_tables_get_distinct_ids(self, service, store):
        async def scenario():
            first = await service.commit(store, make_candidate(table_id="L1"))
            second = await service.commit(store, make_candidate(table_id="L2"))
            return first, second

        first, second = asyncio.run(scenario())

        assert first.id != second.id

    def test_cancelled_booking_cannot_be_edited(self, service, store):
        async def scenario():
            created = await service.commit(store, make_candidate())
            await service.cancel(store, created.id, "m2")
            await service.commit(store, make_candidate(id=created.id, table_id="L2"))

        with pytest.raises(InvalidTransition):
            asyncio.run(scenario())

    def test_permanent_id_cannot_be_written(self, service, store):
        with pytest.raises(NotPermitted):
            asyncio.run(service.commit(store, make_candidate(id="permanent-L13-2026-03-10")))

    def test_concurrent_writes_from_stale_snapshot_both_succeed(self, service, store):
        """Both writers checked the same empty snapshot; neither is rejected."""
        stale = make_context()

        async def scenario():
            first = make_candidate(member_id="m1", member_name="Alice")
            second = make_candidate(member_id="m2", member_name="Bob")
            service.ensure_selectable(stale, first)
            service.ensure_selectable(stale, second)
            await service.commit(store, first)
            await service.commit(store, second)
            return await load_context(store, TODAY)

        context = asyncio.run(scenario())

        assert len(context.active_bookings) == 2
        collisions = service.find_collisions(context)
        assert len(collisions) == 1
        assert collisions[0].resource == "table"
        assert collisions[0].resource_id == "L1"
        assert sorted(collisions[0].holders) == ["Alice", "Bob"]


class TestCancel:
    """Tests for the active to cancelled transition."""

    def test_cancel_keeps_document(self, service, store):
        async def scenario():
            created = await service.commit(store, make_candidate())
            cancelled = await service.cancel(store, created.id, "admin-1")
            return cancelled, await store.list("bookings")

        cancelled, stored = asyncio.run(scenario())

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.cancelled_by == "admin-1"
        assert cancelled.cancelled_at is not None
        assert len(stored) == 1

    def test_cancel_twice_is_invalid(self, service, store):
        async def scenario():
            created = await service.commit(store, make_candidate())
            await service.cancel(store, created.id, "m2")
            await service.cancel(store, created.id, "m2")

        with pytest.raises(InvalidTransition):
            asyncio.run(scenario())

    def test_cancel_missing_booking(self, service, store):
        with pytest.raises(BookingNotFound):
            asyncio.run(service.cancel(store, "b404", "m2"))

    def test_cancel_permanent_booking(self, service, store):
        with pytest.raises(NotPermitted):
            asyncio.run(service.cancel(store, "permanent-L13-2026-03-10", "admin-1"))

    def test_delete_removes_document(self, service, store):
        async def scenario():
            created = await service.commit(store, make_candidate())
            await service.delete(store, created.id)
            return await store.list("bookings")

        assert asyncio.run(scenario()) == []

    def test_delete_missing_booking(self, service, store):
        with pytest.raises(BookingNotFound):
            asyncio.run(service.delete(store, "b404"))


class TestFindCollisions:
    """Tests for after-the-fact double booking detection."""

    def test_no_collisions(self, service):
        context = make_context([make_booking("b1"), make_booking("b2", table_id="L2")])

        assert service.find_collisions(context) == []

    def test_booking_on_permanent_table_collides(self, service):
        context = make_context([make_booking("b1", table_id="L13")])

        collisions = service.find_collisions(context)

        assert len(collisions) == 1
        assert collisions[0].booking_ids == ["permanent-L13-2026-03-10", "b1"]

    def test_terrain_collision(self, service):
        context = make_context([
            make_booking("b1", terrain_box_id="SCIFI-1"),
            make_booking("b2", table_id="L2", terrain_box_id="SCIFI-1", member_name="Bob"),
        ])

        collisions = service.find_collisions(context)

        assert [(c.resource, c.resource_id) for c in collisions] == [("terrain", "SCIFI-1")]

    def test_cancelled_bookings_do_not_collide(self, service):
        context = make_context([
            make_booking("b1"),
            make_booking("b2", status=BookingStatus.CANCELLED),
        ])

        assert service.find_collisions(context) == []

    def test_from_date_skips_earlier_dates(self, service):
        past = date(2026, 3, 3)
        context = make_context([make_booking("b1", day=past), make_booking("b2", day=past)])

        assert len(service.find_collisions(context)) == 1
        assert service.find_collisions(context, from_date=TODAY) == []
