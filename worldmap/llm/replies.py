"""Decoded model replies."""

import json
import re
from dataclasses import dataclass
from typing import Any

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int
    output_tokens: int

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass(frozen=True)
class JsonReply:
    """One JSON completion.

    Attributes:
        data: The decoded JSON value, or None when the text held none.
        text: Raw reply text, kept for logging.
        model: Model that answered.
        usage: Token counts, when the provider reports them.
    """

    data: Any
    text: str
    model: str = ""
    usage: TokenUsage | None = None


def decode_json_text(text: str) -> Any | None:
    """Decode the JSON value in a model reply.

    Tolerates markdown code fences and prose around a single object.

    Returns:
        The decoded value, or None if no JSON could be read.
    """
    cleaned = _CODE_FENCE.sub("", text.strip()).strip()
    if not cleaned:
        return None
    try:
        return json.loads(cleaned)
    except ValueError:
        pass

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        return json.loads(cleaned[start : end + 1])
    except ValueError:
        return None
