"""Force-and-constraint layout for the world map.

A small force-directed relaxation tuned for graphs that grow by a place or
two per merge. Existing positions are kept and nudged; only new places are
seeded, next to the current place. The result is not deterministic unless a
seeded random source is injected.
"""

import logging
import math
import random
from dataclasses import dataclass

from worldmap.config import settings
from worldmap.graph.schemas import Bearing, Place, World

logger = logging.getLogger(__name__)

_DIAGONAL = math.sqrt(0.5)

# Screen coordinates: y grows downward, so north is -y
_BEARING_VECTORS: dict[Bearing, tuple[float, float]] = {
    Bearing.N: (0.0, -1.0),
    Bearing.NE: (_DIAGONAL, -_DIAGONAL),
    Bearing.E: (1.0, 0.0),
    Bearing.SE: (_DIAGONAL, _DIAGONAL),
    Bearing.S: (0.0, 1.0),
    Bearing.SW: (-_DIAGONAL, _DIAGONAL),
    Bearing.W: (-1.0, 0.0),
    Bearing.NW: (-_DIAGONAL, -_DIAGONAL),
}

UNSPECIFIED_BEARING_VECTOR = _BEARING_VECTORS[Bearing.E]


def bearing_vector(bearing: Bearing | None) -> tuple[float, float]:
    """Map a bearing to a unit vector in screen coordinates.

    An unspecified bearing (None) points East.
    """
    if bearing is None:
        return UNSPECIFIED_BEARING_VECTOR
    return _BEARING_VECTORS[bearing]


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def _clamp_all(places: list[Place]) -> None:
    for place in places:
        place.x = clamp01(place.x)
        place.y = clamp01(place.y)


@dataclass(frozen=True)
class LayoutConfig:
    """Tuning constants for the relaxation.

    Attributes:
        iterations: Fixed number of relaxation rounds.
        spring_length: Target offset per unit of relation distance.
        spring_step: Fraction of the way a place moves toward its spring
            target each round.
        min_separation: Distance below which two places repel.
        seed_jitter: Side of the square new places are scattered in around
            the seed place.
    """

    iterations: int = 80
    spring_length: float = 0.18
    spring_step: float = 0.08
    min_separation: float = 0.07
    seed_jitter: float = 0.12

    @classmethod
    def from_settings(cls) -> "LayoutConfig":
        return cls(
            iterations=settings.layout_iterations,
            spring_length=settings.layout_spring_length,
            spring_step=settings.layout_spring_step,
            min_separation=settings.layout_min_separation,
            seed_jitter=settings.layout_seed_jitter,
        )


class LayoutEngine:
    """Assigns normalized 2D positions to the places of a World."""

    def __init__(
        self,
        config: LayoutConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the layout engine.

        Args:
            config: Relaxation constants. Defaults to settings.
            rng: Random source for seeding and tie-breaking. Pass a seeded
                random.Random for reproducible layouts.
        """
        self.config = config or LayoutConfig.from_settings()
        self.rng = rng or random.Random()

    def layout(self, world: World) -> None:
        """Seed unpositioned places, relax, then clamp into [0, 1]."""
        places = list(world.places.values())
        if not places:
            return

        seeded = self._seed_positions(world)
        if seeded:
            logger.debug(f"Seeded {seeded} new place position(s)")

        for _ in range(self.config.iterations):
            self._apply_springs(world)
            _clamp_all(places)
            self._apply_repulsion(places)

        _clamp_all(places)

    def _random_position(self) -> tuple[float, float]:
        return self.rng.random() * 0.8 + 0.1, self.rng.random() * 0.8 + 0.1

    def _seed_positions(self, world: World) -> int:
        """Give every unpositioned place a starting point.

        Returns:
            Number of places that were seeded.
        """
        count = 0
        seed = world.current_place
        if seed is not None and not seed.has_position:
            seed.x, seed.y = self._random_position()
            count += 1

        jitter = self.config.seed_jitter
        for place in world.places.values():
            if place.has_position:
                continue
            if seed is not None:
                place.x = seed.x + (self.rng.random() - 0.5) * jitter
                place.y = seed.y + (self.rng.random() - 0.5) * jitter
            else:
                place.x, place.y = self._random_position()
            count += 1
        return count

    def _apply_springs(self, world: World) -> None:
        """Pull each relation's b toward the point its bearing and distance imply."""
        for relation in world.relations:
            a = world.places.get(relation.a)
            b = world.places.get(relation.b)
            if a is None or b is None:
                continue
            length = self.config.spring_length * (relation.distance or 1)
            vx, vy = bearing_vector(relation.bearing)
            target_x = a.x + vx * length
            target_y = a.y + vy * length
            b.x += (target_x - b.x) * self.config.spring_step
            b.y += (target_y - b.y) * self.config.spring_step

    def _apply_repulsion(self, places: list[Place]) -> None:
        """Push apart every pair closer than the minimum separation."""
        min_sep = self.config.min_separation
        for i in range(len(places)):
            p = places[i]
            for j in range(i + 1, len(places)):
                q = places[j]
                dx = p.x - q.x
                dy = p.y - q.y
                dist = math.hypot(dx, dy)
                if dist >= min_sep:
                    continue
                if dist < 1e-9:
                    # Coincident: no direction to push along, pick one
                    angle = self.rng.uniform(0.0, 2.0 * math.pi)
                    ux, uy = math.cos(angle), math.sin(angle)
                    dist = 0.0
                else:
                    ux, uy = dx / dist, dy / dist
                # Pushes stay inside the map so edge places still separate
                push = (min_sep - dist) / 2.0
                p.x = clamp01(p.x + ux * push)
                p.y = clamp01(p.y + uy * push)
                q.x = clamp01(q.x - ux * push)
                q.y = clamp01(q.y - uy * push)
