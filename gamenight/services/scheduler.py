"""Background sweep reporting double bookings."""
import logging
from datetime import datetime
from typing import List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from gamenight.core import dates
from gamenight.core.config import settings
from gamenight.schemas import Collision
from gamenight.services.booking_service import booking_service
from gamenight.services.club_context import load_context

logger = logging.getLogger(__name__)


class CollisionSweep:
    """
    Periodically looks for upcoming slots held by more than one booking.

    Concurrent booking writes are never rejected, so two members can end up
    on the same table. The sweep only reports them; an admin resolves each
    one by cancelling a booking.
    """

    def __init__(self):
        """Initialize the scheduler."""
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.running = False
        self.store = None
        self.last_run_at: Optional[datetime] = None
        self.last_collisions: List[Collision] = []

    async def start(self, store):
        """Start the sweep against ``store``."""
        if self.running:
            logger.warning("Scheduler is already running")
            return

        logger.info("Starting collision sweep")
        self.store = store
        # A fresh scheduler binds to the currently running event loop
        self.scheduler = AsyncIOScheduler()

        self.scheduler.add_job(
            self.sweep,
            IntervalTrigger(minutes=settings.COLLISION_CHECK_MINUTES),
            id="collision_sweep",
            name="Report double bookings",
            replace_existing=True,
        )

        self.scheduler.start()
        self.running = True
        logger.info("Collision sweep started")

    async def stop(self):
        """Stop the scheduler."""
        if not self.running:
            return

        logger.info("Stopping collision sweep")
        self.scheduler.shutdown(wait=False)
        self.running = False
        logger.info("Collision sweep stopped")

    async def sweep(self) -> List[Collision]:
        """Check every date from today on and log each collision found."""
        logger.debug("Running collision sweep")

        try:
            today = dates.today()
            context = await load_context(self.store, today)
            collisions = booking_service.find_collisions(context, from_date=today)
        except Exception as e:
            logger.error(f"Error in collision sweep: {e}", exc_info=True)
            return self.last_collisions

        for collision in collisions:
            logger.warning(
                f"Double booking on {collision.date}: {collision.resource} "
                f"{collision.resource_id} held by {', '.join(collision.holders)}"
            )

        self.last_run_at = dates.utc_now()
        self.last_collisions = collisions
        logger.info(f"Collision sweep found {len(collisions)} collision(s)")
        return collisions


# Singleton instance
collision_sweep = CollisionSweep()
