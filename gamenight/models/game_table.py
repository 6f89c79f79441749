"""Game table model."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from gamenight.core.database import Base


class GameTable(Base):
    """Represents a bookable club table."""

    __tablename__ = "tables"

    id = Column(String, primary_key=True, index=True)  # e.g. "L1", "S3"
    name = Column(String, nullable=False)
    size = Column(String, nullable=False)  # 6x4 or 3x4
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
