"""Map renderer: pins, edges, place cards and fast travel."""

import logging
from dataclasses import dataclass
from typing import Callable

from worldmap.graph.exceptions import RendererNotInitializedError
from worldmap.graph.schemas import Place, World
from worldmap.render.surface import DrawingSurface

logger = logging.getLogger(__name__)

FastTravelCallback = Callable[[Place], None]


@dataclass
class PlaceCard:
    """Everything shown when a pin is opened, plus the travel action."""

    place: Place
    on_travel: FastTravelCallback | None = None

    @property
    def name(self) -> str:
        return self.place.name

    @property
    def tags_text(self) -> str:
        return ", ".join(self.place.tags) if self.place.tags else "—"

    @property
    def notes_text(self) -> str:
        return self.place.notes or "No notes yet."

    def travel(self) -> bool:
        """Invoke the fast travel callback with the full place.

        Returns:
            False if no callback is registered.
        """
        if self.on_travel is None:
            return False
        self.on_travel(self.place)
        return True


def visited_summary(world: World) -> str:
    """Summary counter shown next to the map, e.g. '2/5 visited'."""
    return f"{world.visited_count}/{len(world.places)} visited"


class MapRenderer:
    """Clear-and-redraw renderer for a World.

    The graph is small, so every render repaints the whole surface.
    """

    def __init__(self) -> None:
        self._surface: DrawingSurface | None = None
        self._on_fast_travel: FastTravelCallback | None = None
        self.summary = ""

    def init(self, surface: DrawingSurface) -> None:
        """Bind the drawing surface."""
        self._surface = surface

    @property
    def is_initialized(self) -> bool:
        return self._surface is not None

    @property
    def surface(self) -> DrawingSurface:
        if self._surface is None:
            raise RendererNotInitializedError()
        return self._surface

    def set_on_fast_travel(self, callback: FastTravelCallback | None) -> None:
        self._on_fast_travel = callback

    def render(self, world: World) -> str:
        """Redraw the whole world.

        Edges are drawn first so pins sit on top. Places without a position
        yet are skipped.

        Returns:
            The visited summary text.
        """
        surface = self.surface
        surface.clear()
        width, height = surface.width, surface.height

        for relation in world.relations:
            a = world.places.get(relation.a)
            b = world.places.get(relation.b)
            if a is None or b is None or not a.has_position or not b.has_position:
                continue
            surface.draw_line(a.x * width, a.y * height, b.x * width, b.y * height)

        for place in world.places.values():
            if not place.has_position:
                continue
            surface.draw_pin(
                place.id,
                place.x * width,
                place.y * height,
                place.name,
                place.visited,
            )

        self.summary = visited_summary(world)
        return self.summary

    def open_place_card(self, world: World, place_id: str) -> PlaceCard | None:
        """Build the card for a place, or None if the id is unknown."""
        place = world.places.get(place_id)
        if place is None:
            logger.debug(f"No place card for unknown id: {place_id}")
            return None
        return PlaceCard(place=place, on_travel=self._on_fast_travel)
