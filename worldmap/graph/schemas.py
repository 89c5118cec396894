"""Pydantic schemas for the world map graph.

This module contains the value types shared by every map component:
- Enums for relation types and compass bearings
- Place and Relation (graph content)
- World (the aggregate that is merged, laid out, rendered and persisted)
- PlaceFact and Facts (a sanitized batch of candidate facts)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class RelationType(str, Enum):
    """How two places are connected."""

    PATH = "path"
    NEAR = "near"
    RIVER = "river"
    ROAD = "road"
    DOOR = "door"


class Bearing(str, Enum):
    """Compass direction from a relation's first place to its second."""

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


Distance = Literal[1, 2, 3]


# =============================================================================
# Graph Content
# =============================================================================


class Place(BaseModel):
    """A known location on the world map."""

    id: str = Field(description="Stable slug-style identifier")
    name: str = Field(description="Display name, not necessarily unique")
    tags: list[str] = Field(default_factory=list)
    visited: bool = False
    notes: str = ""
    x: float | None = Field(default=None, description="Normalized position, None until laid out")
    y: float | None = None

    @property
    def has_position(self) -> bool:
        return self.x is not None and self.y is not None


class Relation(BaseModel):
    """A typed spatial edge between two places (a -> b for bearing purposes)."""

    a: str
    b: str
    type: RelationType = RelationType.NEAR
    bearing: Bearing | None = None
    distance: Distance | None = None

    def key(self) -> tuple[str, str, str, str, int]:
        """Deduplication key over the full tuple."""
        return (
            self.a,
            self.b,
            self.type.value,
            self.bearing.value if self.bearing else "",
            self.distance or 0,
        )


class World(BaseModel):
    """All places, relations and the current place of one map."""

    model_config = ConfigDict(populate_by_name=True)

    places: dict[str, Place] = Field(default_factory=dict)
    relations: list[Relation] = Field(default_factory=list)
    last_place_id: str | None = Field(default=None, alias="lastPlaceId")

    @classmethod
    def empty(cls) -> World:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.places and not self.relations and self.last_place_id is None

    @property
    def current_place(self) -> Place | None:
        if self.last_place_id is None:
            return None
        return self.places.get(self.last_place_id)

    @property
    def visited_count(self) -> int:
        return sum(1 for place in self.places.values() if place.visited)

    def to_blob(self) -> dict[str, Any]:
        """Serialize to the persisted shape {places, relations, lastPlaceId}."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Facts (sanitized input to the merger)
# =============================================================================


class PlaceFact(BaseModel):
    """A candidate place after sanitization."""

    id: str
    name: str
    tags: list[str] = Field(default_factory=list)
    notes: str = ""


class Facts(BaseModel):
    """A sanitized batch of candidate places, relations and current place."""

    places: list[PlaceFact] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)
    current_place_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.places and not self.relations and self.current_place_id is None
