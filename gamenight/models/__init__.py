"""Database models."""
from gamenight.models.game_table import GameTable
from gamenight.models.terrain_box import TerrainBox
from gamenight.models.booking import Booking
from gamenight.models.schedule_date import ScheduleDate
from gamenight.models.member import Member
from gamenight.models.game_system import GameSystem

__all__ = ["GameTable", "TerrainBox", "Booking", "ScheduleDate", "Member", "GameSystem"]
