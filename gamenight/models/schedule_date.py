"""Schedule exception model."""
from sqlalchemy import Column, String, Date, DateTime
from sqlalchemy.sql import func
from gamenight.core.database import Base


class ScheduleDate(Base):
    """A single cancelled or special-event date."""

    __tablename__ = "schedule_dates"

    id = Column(String, primary_key=True)  # "<kind>:<YYYY-MM-DD>"
    kind = Column(String, nullable=False, index=True)  # cancelled, special
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
