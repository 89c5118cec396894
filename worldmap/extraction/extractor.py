"""FactExtractor: scene description -> sanitized map facts via an LLM."""

import logging
from typing import Sequence

from worldmap.config import settings
from worldmap.extraction.prompts import MAP_FACTS_SYSTEM_PROMPT, build_map_facts_user_prompt
from worldmap.graph.facts import SanitizeLimits, parse_facts
from worldmap.graph.schemas import Facts
from worldmap.llm.clients import JsonCompletionClient
from worldmap.llm.factory import get_extraction_client
from worldmap.llm.retry import RetryPolicy, call_with_retry

logger = logging.getLogger(__name__)


class FactExtractor:
    """Turns a scene description into a Facts batch for the merger.

    Provider errors propagate; bad model output degrades to empty Facts.
    """

    def __init__(
        self,
        client: JsonCompletionClient | None = None,
        retry_policy: RetryPolicy | None = None,
        limits: SanitizeLimits | None = None,
    ) -> None:
        self.client = client or get_extraction_client()
        self.retry_policy = retry_policy
        self.limits = limits

    async def extract(
        self,
        scene_description: str,
        known_places: Sequence[str] = (),
    ) -> Facts:
        """Extract map facts from one scene.

        Args:
            scene_description: Narrative text of the scene.
            known_places: Names already on the map, so the model reuses ids.

        Returns:
            Sanitized Facts. current_place_id defaults to the first place
            when the model leaves it out.
        """
        user_prompt = build_map_facts_user_prompt(scene_description, known_places)
        reply = await call_with_retry(
            lambda: self.client.complete_json(
                MAP_FACTS_SYSTEM_PROMPT,
                user_prompt,
                max_tokens=settings.extraction_max_tokens,
            ),
            self.retry_policy,
        )

        if reply.data is None:
            logger.warning(f"Unparsable map facts from model: {reply.text[:200]!r}")
            return Facts()

        facts = parse_facts(reply.data, self.limits)
        if facts.current_place_id is None and facts.places:
            facts.current_place_id = facts.places[0].id

        if facts.is_empty:
            logger.info("Model found no map facts in the scene")
        else:
            logger.debug(
                f"Extracted {len(facts.places)} place(s), {len(facts.relations)} relation(s), "
                f"current={facts.current_place_id}"
            )
        return facts
