"""Prompt templates for map fact extraction."""

from typing import Sequence

MAP_FACTS_SYSTEM_PROMPT = """Extract world-map facts from a single fantasy scene.
Return STRICT JSON with keys: places, relations, current_place_id.

Schema:
{
  "places": [{"name": string, "id": string, "tags": [string], "notes": string}],
  "relations": [{"a": string, "b": string,
                 "type": "near" | "path" | "door" | "road" | "river",
                 "bearing"?: "N" | "NE" | "E" | "SE" | "S" | "SW" | "W" | "NW",
                 "distance"?: 1 | 2 | 3}],
  "current_place_id": string
}

Rules:
1. Prefer 0-2 relations.
2. If a place matches a name from KNOWN PLACE NAMES, reuse its id (slug of the name).
3. If there is no clear location, create one from the dominant setting noun phrase
   (e.g. "Misty Harbor", "Ancient Library Entrance").
4. Set current_place_id to where the scene primarily occurs.
5. Keep notes short (<= 24 words).
6. A relation's bearing is the direction from "a" to "b"."""


def build_map_facts_user_prompt(scene_description: str, known_places: Sequence[str]) -> str:
    """Build the user prompt for one scene.

    Args:
        scene_description: Narrative text of the scene.
        known_places: Names of places already on the map.

    Returns:
        Prompt text.
    """
    known = ", ".join(known_places) if known_places else "(none)"
    return f'SCENE:\n"""{scene_description}"""\n\nKNOWN PLACE NAMES:\n{known}'
