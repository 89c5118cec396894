"""World map exception definitions.

Data-quality problems in incoming facts are never raised; these cover
programmer errors only.
"""


class WorldMapError(Exception):
    """Base exception for world map operations."""

    pass


class RendererNotInitializedError(WorldMapError):
    """The renderer was used before a drawing surface was bound with init()."""

    def __init__(self, message: str = "Renderer used before init()") -> None:
        super().__init__(message)
