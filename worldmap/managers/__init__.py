"""Manager classes for world map state."""

from worldmap.managers.world_state_manager import WorldStateManager

__all__ = [
    "WorldStateManager",
]
