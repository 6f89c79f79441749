"""Schedule and date-selection schemas."""
from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import List
from datetime import date


class ScheduleKind(str, Enum):
    """Kinds of schedule exception."""

    CANCELLED = "cancelled"
    SPECIAL = "special"


class ScheduleDateInDB(BaseModel):
    id: str
    kind: ScheduleKind
    date: date

    model_config = ConfigDict(from_attributes=True)


class ScheduleResponse(BaseModel):
    """Both schedule exception sets."""

    cancelled_dates: List[date]
    special_dates: List[date]


class ScheduleDatesUpdate(BaseModel):
    """Replace one schedule exception set."""

    dates: List[date]


class SelectableDate(BaseModel):
    """A date offered for viewing, tagged with its closed state."""

    date: date
    is_cancelled: bool


class DateListResponse(BaseModel):
    today: date
    dates: List[date]


class SelectableDatesResponse(BaseModel):
    today: date
    dates: List[SelectableDate]
