"""Fact merger: the single entry point for folding facts into a World."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from worldmap.graph.facts import SanitizeLimits, parse_facts
from worldmap.graph.layout import LayoutEngine
from worldmap.graph.schemas import Facts, Place, World
from worldmap.graph.store import add_relation, find_place_by_name, mark_visited, upsert_place

logger = logging.getLogger(__name__)


@runtime_checkable
class WorldPersistence(Protocol):
    """Anything that can snapshot and restore a World."""

    def save(self, world: World) -> None:
        ...

    def load(self) -> World:
        ...

    def clear_all(self) -> World:
        ...


@dataclass
class MergeResult:
    """What a merge changed.

    Attributes:
        places_added: Ids of places that were new.
        places_updated: Ids of existing places that were merged again.
        relations_added: Number of relations stored.
        relations_dropped: Relations rejected as dangling or duplicate.
        current_place_id: The place marked current, if any.
    """

    places_added: list[str]
    places_updated: list[str]
    relations_added: int = 0
    relations_dropped: int = 0
    current_place_id: str | None = None

    @classmethod
    def nothing(cls) -> "MergeResult":
        return cls(places_added=[], places_updated=[])


class FactMerger:
    """Folds sanitized facts into a World, then lays out and persists it."""

    def __init__(
        self,
        layout_engine: LayoutEngine | None = None,
        persistence: WorldPersistence | None = None,
        limits: SanitizeLimits | None = None,
    ) -> None:
        """Initialize the merger.

        Args:
            layout_engine: Engine run after every merge.
            persistence: Adapter saved to after every mutation. None keeps
                the world in memory only.
            limits: Sanitization caps for raw payloads.
        """
        self.layout_engine = layout_engine or LayoutEngine()
        self.persistence = persistence
        self.limits = limits

    def merge_facts(self, world: World, facts: Facts | dict[str, Any] | None) -> MergeResult:
        """Merge a batch of facts into the world.

        Places are upserted before relations so a relation can reference
        places from the same batch; the current place is resolved last.
        Malformed entries are dropped one at a time.

        Args:
            world: World to modify in place.
            facts: A Facts value or a raw payload. None is a no-op.

        Returns:
            MergeResult describing the changes.
        """
        if facts is None:
            return MergeResult.nothing()

        parsed = parse_facts(facts, self.limits)
        result = MergeResult.nothing()

        for place in parsed.places:
            if upsert_place(world, place):
                result.places_added.append(place.id)
            elif place.id not in result.places_updated:
                result.places_updated.append(place.id)

        for relation in parsed.relations:
            if add_relation(world, relation):
                result.relations_added += 1
            else:
                result.relations_dropped += 1
                logger.debug(
                    f"Skipped relation {relation.a} -> {relation.b} "
                    "(unknown endpoint or duplicate)"
                )

        if parsed.current_place_id is not None:
            if mark_visited(world, parsed.current_place_id):
                result.current_place_id = parsed.current_place_id
            else:
                logger.debug(f"Unknown current place: {parsed.current_place_id}")

        self.layout_engine.layout(world)
        self._persist(world)

        logger.info(
            f"Merged facts: +{len(result.places_added)} places, "
            f"{len(result.places_updated)} updated, +{result.relations_added} relations"
        )
        return result

    def visit(self, world: World, place_id: str) -> Place | None:
        """Mark a known place as visited and current, then persist.

        Positions are left alone; no layout pass runs.
        """
        if not mark_visited(world, place_id):
            return None
        self._persist(world)
        return world.places[place_id]

    def set_current_place_by_name(self, world: World, name: str) -> Place | None:
        """Mark the place with the given name as visited and current.

        Returns:
            The matching place, or None if no place has that name.
        """
        place = find_place_by_name(world, name)
        if place is None:
            return None
        return self.visit(world, place.id)

    def reset(self, world: World) -> None:
        """Clear the world in place and persist the empty state."""
        world.places.clear()
        world.relations.clear()
        world.last_place_id = None
        self._persist(world)

    def _persist(self, world: World) -> None:
        if self.persistence is not None:
            self.persistence.save(world)
