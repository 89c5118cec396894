"""Parse-and-sanitize boundary for untrusted facts payloads.

Raw payloads come from an LLM extraction step and have no enforced schema.
Every field is coerced or rejected here, so the stores only ever see
validated PlaceFact and Relation values. Bad entries are dropped one at a
time; a payload is never rejected as a whole.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from worldmap.config import settings
from worldmap.graph.schemas import Bearing, Facts, PlaceFact, Relation, RelationType

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

VALID_DISTANCES = (1, 2, 3)


@dataclass(frozen=True)
class SanitizeLimits:
    """Length and count caps applied to incoming facts."""

    max_name_length: int = 60
    max_tags: int = 6
    max_notes_length: int = 140

    @classmethod
    def from_settings(cls) -> "SanitizeLimits":
        return cls(
            max_name_length=settings.max_name_length,
            max_tags=settings.max_tags,
            max_notes_length=settings.max_notes_length,
        )


def slugify(value: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', strip edge hyphens.

    Examples:
        >>> slugify("Misty Harbor")
        'misty-harbor'
        >>> slugify("  The Old Mill (ruined)! ")
        'the-old-mill-ruined'
    """
    return _NON_ALNUM.sub("-", value.lower()).strip("-")


def _clean_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def sanitize_place(raw: Any, limits: SanitizeLimits | None = None) -> PlaceFact | None:
    """Convert one raw place entry into a PlaceFact.

    Returns None when the entry has no usable name or id.
    """
    limits = limits or SanitizeLimits.from_settings()
    if not isinstance(raw, Mapping):
        return None

    full_name = _clean_str(raw.get("name"))
    if not full_name:
        return None

    place_id = _clean_str(raw.get("id")) or slugify(full_name)
    if not place_id:
        return None

    raw_tags = raw.get("tags")
    tags: list[str] = []
    if isinstance(raw_tags, (list, tuple)):
        for tag in raw_tags[: limits.max_tags]:
            text = _clean_str(tag)
            if text and text not in tags:
                tags.append(text)

    return PlaceFact(
        id=place_id,
        name=full_name[: limits.max_name_length],
        tags=tags,
        notes=_clean_str(raw.get("notes"))[: limits.max_notes_length],
    )


def _parse_relation_type(value: Any) -> RelationType:
    if isinstance(value, str):
        try:
            return RelationType(value.strip().lower())
        except ValueError:
            pass
    return RelationType.NEAR


def _parse_bearing(value: Any) -> Bearing | None:
    if isinstance(value, str):
        try:
            return Bearing(value.strip().upper())
        except ValueError:
            return None
    return None


def _parse_distance(value: Any) -> int | None:
    # bool is an int subclass; True must not read as distance 1
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value in VALID_DISTANCES else None


def sanitize_relation(raw: Any) -> Relation | None:
    """Convert one raw relation entry into a Relation.

    Returns None when either endpoint id is missing or both endpoints are the
    same place. Unknown types fall back
    to 'near'; unknown bearings and distances become None.
    """
    if not isinstance(raw, Mapping):
        return None

    a = _clean_str(raw.get("a"))
    b = _clean_str(raw.get("b"))
    if not a or not b or a == b:
        return None

    return Relation(
        a=a,
        b=b,
        type=_parse_relation_type(raw.get("type")),
        bearing=_parse_bearing(raw.get("bearing")),
        distance=_parse_distance(raw.get("distance")),
    )


def parse_facts(raw: Any, limits: SanitizeLimits | None = None) -> Facts:
    """Parse an untyped facts payload into a sanitized Facts value.

    Args:
        raw: Decoded JSON payload, ideally a mapping with 'places',
            'relations' and 'current_place_id'. A Facts value goes
            through the same checks. Anything else parses to an empty
            Facts.
        limits: Caps for names, tags and notes. Defaults to settings.

    Returns:
        Facts containing only the entries that survived sanitization.
    """
    if isinstance(raw, Facts):
        raw = raw.model_dump(mode="json")
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug(f"Ignoring facts payload of type {type(raw).__name__}")
        return Facts()

    limits = limits or SanitizeLimits.from_settings()

    raw_places = raw.get("places")
    places: list[PlaceFact] = []
    if isinstance(raw_places, (list, tuple)):
        for entry in raw_places:
            place = sanitize_place(entry, limits)
            if place is None:
                logger.debug(f"Dropped malformed place entry: {entry!r}")
                continue
            places.append(place)

    raw_relations = raw.get("relations")
    relations: list[Relation] = []
    if isinstance(raw_relations, (list, tuple)):
        for entry in raw_relations:
            relation = sanitize_relation(entry)
            if relation is None:
                logger.debug(f"Dropped malformed relation entry: {entry!r}")
                continue
            relations.append(relation)

    current = _clean_str(raw.get("current_place_id")) or None

    return Facts(places=places, relations=relations, current_place_id=current)
