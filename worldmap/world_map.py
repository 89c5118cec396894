"""WorldMap: the map subsystem as owned by the game loop.

One WorldMap holds one explicit World value and wires it through the
merger, layout engine, renderer and persistence adapter. There is no
module-level world; callers create and keep the instance.
"""

import logging
from typing import Any

from worldmap.graph.layout import LayoutEngine
from worldmap.graph.merger import FactMerger, MergeResult, WorldPersistence
from worldmap.graph.schemas import Facts, Place, World
from worldmap.render.renderer import FastTravelCallback, MapRenderer, PlaceCard, visited_summary
from worldmap.render.surface import DrawingSurface

logger = logging.getLogger(__name__)


class WorldMap:
    """Facade over one world map.

    Every mutation repaints the bound surface (if any) and saves through
    the persistence adapter (if any).
    """

    def __init__(
        self,
        world: World | None = None,
        persistence: WorldPersistence | None = None,
        layout_engine: LayoutEngine | None = None,
        renderer: MapRenderer | None = None,
    ) -> None:
        self.world = world if world is not None else World.empty()
        self.persistence = persistence
        self.merger = FactMerger(layout_engine=layout_engine, persistence=persistence)
        self.renderer = renderer or MapRenderer()

    @classmethod
    def open(
        cls,
        persistence: WorldPersistence,
        layout_engine: LayoutEngine | None = None,
    ) -> "WorldMap":
        """Restore the saved world (or start empty) from a persistence adapter."""
        world = persistence.load()
        logger.debug(f"Opened world map with {len(world.places)} place(s)")
        return cls(world=world, persistence=persistence, layout_engine=layout_engine)

    def init(self, surface: DrawingSurface) -> None:
        """Bind a drawing surface and paint the current world."""
        self.renderer.init(surface)
        self.renderer.render(self.world)

    def set_on_fast_travel(self, callback: FastTravelCallback | None) -> None:
        self.renderer.set_on_fast_travel(callback)

    @property
    def summary(self) -> str:
        return visited_summary(self.world)

    def known_place_names(self) -> list[str]:
        return [place.name for place in self.world.places.values()]

    def merge_facts(self, facts: Facts | dict[str, Any] | None) -> MergeResult:
        """Merge a facts batch, relayout, repaint and save."""
        if facts is None:
            return MergeResult.nothing()
        result = self.merger.merge_facts(self.world, facts)
        self._repaint()
        return result

    def visit(self, place_id: str) -> Place | None:
        """Make a known place the current one (e.g. after fast travel)."""
        place = self.merger.visit(self.world, place_id)
        if place is not None:
            self._repaint()
        return place

    def set_current_place_by_name(self, name: str) -> Place | None:
        place = self.merger.set_current_place_by_name(self.world, name)
        if place is not None:
            self._repaint()
        return place

    def open_place_card(self, place_id: str) -> PlaceCard | None:
        return self.renderer.open_place_card(self.world, place_id)

    def clear_all(self) -> None:
        """Reset to an empty world and save it immediately."""
        self.merger.reset(self.world)
        self._repaint()

    def _repaint(self) -> None:
        if self.renderer.is_initialized:
            self.renderer.render(self.world)
