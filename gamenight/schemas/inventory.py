"""Table and terrain box schemas."""
from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class TableSize(str, Enum):
    """Closed set of table sizes (feet)."""

    LARGE = "6x4"
    SMALL = "3x4"


class TerrainCategory(str, Enum):
    """Closed set of terrain box categories."""

    SCIFI = "Sci-Fi"
    HISTORICAL = "Historical"
    FANTASY = "Fantasy"
    AOS = "Age of Sigmar"
    WARHAMMER_40K = "Warhammer 40k"


class TableBase(BaseModel):
    """Base table schema."""

    name: str
    size: TableSize


class TableCreate(TableBase):
    """Schema for creating a table."""

    id: str


class TableUpdate(BaseModel):
    """Schema for updating a table. The id is immutable."""

    name: Optional[str] = None
    size: Optional[TableSize] = None


class TableInDB(TableBase):
    """Schema for a table from the store."""

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TerrainBoxBase(BaseModel):
    """Base terrain box schema."""

    name: str
    category: TerrainCategory
    image_url: str
    uploaded_image_url: Optional[str] = None
    disabled: bool = False


class TerrainBoxCreate(TerrainBoxBase):
    """Schema for creating a terrain box."""

    id: str


class TerrainBoxUpdate(BaseModel):
    """Schema for updating a terrain box."""

    name: Optional[str] = None
    category: Optional[TerrainCategory] = None
    image_url: Optional[str] = None
    uploaded_image_url: Optional[str] = None
    disabled: Optional[bool] = None


class TerrainBoxInDB(TerrainBoxBase):
    """Schema for a terrain box from the store."""

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
