"""Booking model."""
from sqlalchemy import Column, Integer, String, DateTime, Date, Index
from gamenight.core.database import Base


class Booking(Base):
    """Represents a member's reservation of a table (and optionally terrain) for one date."""

    __tablename__ = "bookings"

    id = Column(String, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    # No foreign keys: tables and terrain may be deleted while history remains
    table_id = Column(String, nullable=False)
    terrain_box_id = Column(String, nullable=True)
    member_id = Column(String, nullable=False, index=True)
    member_name = Column(String, nullable=False)
    game_system = Column(String, nullable=False)
    player_count = Column(Integer, nullable=False, default=2)
    created_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String, nullable=False, default="active")  # active, cancelled
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_by = Column(String, nullable=True)

    __table_args__ = (
        Index("ix_bookings_date_status", "date", "status"),
    )
