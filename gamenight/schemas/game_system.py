"""Game system catalog schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class GameSystemCreate(BaseModel):
    """Schema for adding a game system."""

    name: str = Field(..., max_length=100)


class GameSystemInDB(BaseModel):
    """Schema for a game system from the store."""

    id: str
    name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
