"""Terrain box model."""
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from gamenight.core.database import Base


class TerrainBox(Base):
    """Represents a box of terrain that can be reserved alongside a table."""

    __tablename__ = "terrain_boxes"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    image_url = Column(String, nullable=False)
    uploaded_image_url = Column(String, nullable=True)  # Overrides image_url when set
    disabled = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
