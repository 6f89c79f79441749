"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gamenight.api import admin, bookings, dates, game_systems, members, schedule, stats, tables, terrain
from gamenight.core.config import settings
from gamenight.core.database import AsyncSessionLocal, engine, init_db
from gamenight.services.document_store import DocumentStore
from gamenight.services.scheduler import collision_sweep
from gamenight.services.seed import seed_inventory

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Game Night booking service")
    logger.info(f"Debug mode: {settings.DEBUG}")

    await init_db(engine)
    store = DocumentStore(AsyncSessionLocal)
    app.state.store = store

    if settings.SEED_INVENTORY:
        await seed_inventory(store)

    if settings.COLLISION_CHECK_MINUTES > 0:
        await collision_sweep.start(store)

    yield

    # Shutdown
    logger.info("Shutting down Game Night booking service")
    await collision_sweep.stop()


# Create FastAPI app
app = FastAPI(
    title="Game Night Bookings",
    description="Table and terrain bookings for weekly club game nights",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(dates.router)
app.include_router(schedule.router)
app.include_router(bookings.router)
app.include_router(tables.router)
app.include_router(terrain.router)
app.include_router(members.router)
app.include_router(game_systems.router)
app.include_router(stats.router)
app.include_router(admin.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "collision_sweep_running": collision_sweep.running,
    }


def run():
    """Serve the API with uvicorn."""
    uvicorn.run(
        "gamenight.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
