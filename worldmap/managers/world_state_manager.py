"""WorldStateManager for saving and restoring the world map."""

import json
import logging

from pydantic import ValidationError
from sqlalchemy.orm import Session

from worldmap.config import settings
from worldmap.database.models.world_slot import WorldSlot
from worldmap.graph.schemas import World

logger = logging.getLogger(__name__)


class WorldStateManager:
    """Persistence adapter for one world map slot.

    Handles:
    - Whole-state overwrite of the serialized World on save
    - Restoring the World, treating missing or corrupt data as empty
    - Resetting the slot to an empty World
    """

    def __init__(self, db: Session, slot_key: str | None = None) -> None:
        """Initialize WorldStateManager.

        Args:
            db: SQLAlchemy database session.
            slot_key: Storage slot name. Defaults to settings.map_slot_key.
        """
        self.db = db
        self.slot_key = slot_key or settings.map_slot_key

    def _get_slot(self) -> WorldSlot | None:
        return (
            self.db.query(WorldSlot)
            .filter(WorldSlot.slot_key == self.slot_key)
            .first()
        )

    def save(self, world: World) -> None:
        """Overwrite the slot with the full serialized world."""
        payload = json.dumps(world.to_blob())
        slot = self._get_slot()
        if slot is None:
            slot = WorldSlot(slot_key=self.slot_key, payload=payload)
            self.db.add(slot)
        else:
            slot.payload = payload
        self.db.flush()

    def load(self) -> World:
        """Restore the saved world.

        Returns:
            The saved World, or an empty World if nothing is saved or the
            stored blob cannot be parsed.
        """
        slot = self._get_slot()
        if slot is None:
            return World.empty()

        try:
            data = json.loads(slot.payload)
        except (TypeError, ValueError) as e:
            logger.warning(f"Corrupt world map in slot '{self.slot_key}': {e}")
            return World.empty()

        if data is None:
            return World.empty()

        try:
            world = World.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Invalid world map in slot '{self.slot_key}': {e}")
            return World.empty()

        self._drop_dangling(world)
        return world

    def _drop_dangling(self, world: World) -> None:
        """Remove relations and a current place that point at unknown places."""
        kept = [r for r in world.relations if r.a in world.places and r.b in world.places]
        dropped = len(world.relations) - len(kept)
        if dropped:
            logger.warning(
                f"Dropped {dropped} relation(s) with unknown endpoints from slot '{self.slot_key}'"
            )
            world.relations = kept

        if world.last_place_id is not None and world.last_place_id not in world.places:
            logger.warning(
                f"Unknown current place '{world.last_place_id}' in slot '{self.slot_key}'"
            )
            world.last_place_id = None

    def clear_all(self) -> World:
        """Reset the slot to an empty world and save it immediately."""
        world = World.empty()
        self.save(world)
        return world
