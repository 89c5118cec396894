"""Persisted world map snapshots."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from worldmap.database.models.base import Base, TimestampMixin


class WorldSlot(Base, TimestampMixin):
    """A named slot holding one serialized world map.

    The payload is the whole World as JSON and is overwritten on every save.
    """

    __tablename__ = "world_slots"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    slot_key: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="Storage key (e.g., 'adventure_map')",
    )
    payload: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="JSON blob: {places, relations, lastPlaceId}",
    )

    def __repr__(self) -> str:
        return f"<WorldSlot {self.slot_key}>"
