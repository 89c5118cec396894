"""Map rendering: drawing surfaces, pins, edges and place cards."""

from worldmap.render.renderer import MapRenderer, PlaceCard, visited_summary
from worldmap.render.surface import DrawingSurface, RecordingSurface, SvgSurface

__all__ = [
    "DrawingSurface",
    "MapRenderer",
    "PlaceCard",
    "RecordingSurface",
    "SvgSurface",
    "visited_summary",
]
