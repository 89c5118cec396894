"""Place and relation store operations over a World value.

These functions hold the graph invariants:
- a place id maps to exactly one Place; tags only grow, notes only get
  longer, visited never reverts
- every stored relation has both endpoints in the place store
- no relation tuple is stored twice
"""

from worldmap.graph.schemas import Place, PlaceFact, Relation, World


def upsert_place(world: World, candidate: PlaceFact) -> bool:
    """Insert a new place or enrich an existing one.

    Args:
        world: World to modify in place.
        candidate: Sanitized place fact.

    Returns:
        True if a new place was inserted, False if an existing one was merged.
    """
    existing = world.places.get(candidate.id)
    if existing is None:
        world.places[candidate.id] = Place(
            id=candidate.id,
            name=candidate.name,
            tags=list(dict.fromkeys(candidate.tags)),
            visited=False,
            notes=candidate.notes,
        )
        return True

    for tag in candidate.tags:
        if tag not in existing.tags:
            existing.tags.append(tag)

    # Longest notes win; ties keep what is stored
    if candidate.notes and len(candidate.notes) > len(existing.notes):
        existing.notes = candidate.notes

    return False


def relation_key(relation: Relation) -> tuple[str, str, str, str, int]:
    """Get the deduplication key for a relation."""
    return relation.key()


def has_relation(world: World, candidate: Relation) -> bool:
    key = relation_key(candidate)
    return any(relation_key(existing) == key for existing in world.relations)


def add_relation(world: World, candidate: Relation) -> bool:
    """Append a relation if both endpoints exist and it is not a duplicate.

    Returns:
        True if the relation was stored.
    """
    if candidate.a not in world.places or candidate.b not in world.places:
        return False
    if has_relation(world, candidate):
        return False
    world.relations.append(candidate.model_copy())
    return True


def mark_visited(world: World, place_id: str) -> bool:
    """Mark a place visited and make it the current place.

    Returns:
        False if the place is unknown.
    """
    place = world.places.get(place_id)
    if place is None:
        return False
    place.visited = True
    world.last_place_id = place_id
    return True


def find_place_by_name(world: World, name: str) -> Place | None:
    """Find the first place whose name matches, ignoring case."""
    wanted = name.strip().lower()
    if not wanted:
        return None
    for place in world.places.values():
        if place.name.lower() == wanted:
            return place
    return None
