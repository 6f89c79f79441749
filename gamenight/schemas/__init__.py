"""API schemas."""
from gamenight.schemas.inventory import (
    TableSize,
    TerrainCategory,
    TableCreate,
    TableUpdate,
    TableInDB,
    TerrainBoxCreate,
    TerrainBoxUpdate,
    TerrainBoxInDB,
)
from gamenight.schemas.booking import (
    BookingStatus,
    BookingRequest,
    BookingCandidate,
    BookingInDB,
)
from gamenight.schemas.schedule import (
    ScheduleKind,
    ScheduleDateInDB,
    ScheduleResponse,
    ScheduleDatesUpdate,
    SelectableDate,
    DateListResponse,
    SelectableDatesResponse,
)
from gamenight.schemas.availability import (
    ResourceStatus,
    AvailabilityResponse,
    Collision,
)
from gamenight.schemas.member import Identity, MemberRole, MemberInDB, MemberUpdate
from gamenight.schemas.stats import GameCount, StatsResponse
from gamenight.schemas.game_system import GameSystemCreate, GameSystemInDB

__all__ = [
    "TableSize",
    "TerrainCategory",
    "TableCreate",
    "TableUpdate",
    "TableInDB",
    "TerrainBoxCreate",
    "TerrainBoxUpdate",
    "TerrainBoxInDB",
    "BookingStatus",
    "BookingRequest",
    "BookingCandidate",
    "BookingInDB",
    "ScheduleKind",
    "ScheduleDateInDB",
    "ScheduleResponse",
    "ScheduleDatesUpdate",
    "SelectableDate",
    "DateListResponse",
    "SelectableDatesResponse",
    "ResourceStatus",
    "AvailabilityResponse",
    "Collision",
    "Identity",
    "MemberRole",
    "MemberInDB",
    "MemberUpdate",
    "GameCount",
    "StatsResponse",
    "GameSystemCreate",
    "GameSystemInDB",
]
