"""Map fact extraction from scene descriptions."""

from worldmap.extraction.extractor import FactExtractor
from worldmap.extraction.prompts import MAP_FACTS_SYSTEM_PROMPT, build_map_facts_user_prompt

__all__ = [
    "FactExtractor",
    "MAP_FACTS_SYSTEM_PROMPT",
    "build_map_facts_user_prompt",
]
