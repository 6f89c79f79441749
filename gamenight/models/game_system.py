"""Game system model."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from gamenight.core.database import Base


class GameSystem(Base):
    """A game system offered when entering a booking's game."""

    __tablename__ = "game_systems"

    id = Column(String, primary_key=True)  # slug of the name
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
