"""World map graph.

This module contains the incrementally-built graph of places and relations:
- schemas: Pydantic models for places, relations, worlds and facts
- facts: Parse-and-sanitize boundary for untrusted payloads
- store: Place/relation store operations and invariants
- merger: Folding facts batches into a world
- layout: Bearing-aware force relaxation
"""

from worldmap.graph.schemas import (
    # Enums
    Bearing,
    RelationType,
    # Graph content
    Place,
    Relation,
    World,
    # Facts
    PlaceFact,
    Facts,
)

from worldmap.graph.exceptions import (
    WorldMapError,
    RendererNotInitializedError,
)

from worldmap.graph.facts import SanitizeLimits, parse_facts, slugify
from worldmap.graph.store import (
    add_relation,
    find_place_by_name,
    mark_visited,
    relation_key,
    upsert_place,
)
from worldmap.graph.layout import LayoutConfig, LayoutEngine, bearing_vector
from worldmap.graph.merger import FactMerger, MergeResult, WorldPersistence

__all__ = [
    # Enums
    "Bearing",
    "RelationType",
    # Graph content
    "Place",
    "Relation",
    "World",
    # Facts
    "PlaceFact",
    "Facts",
    "SanitizeLimits",
    "parse_facts",
    "slugify",
    # Store
    "add_relation",
    "find_place_by_name",
    "mark_visited",
    "relation_key",
    "upsert_place",
    # Layout
    "LayoutConfig",
    "LayoutEngine",
    "bearing_vector",
    # Merger
    "FactMerger",
    "MergeResult",
    "WorldPersistence",
    # Exceptions
    "WorldMapError",
    "RendererNotInitializedError",
]
