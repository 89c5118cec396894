"""Database models package."""

from worldmap.database.models.base import Base, TimestampMixin
from worldmap.database.models.world_slot import WorldSlot

__all__ = [
    "Base",
    "TimestampMixin",
    "WorldSlot",
]
