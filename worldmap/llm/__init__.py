"""JSON completion clients used by map fact extraction.

    from worldmap.llm import get_extraction_client

    client = get_extraction_client()  # EXTRACTION=provider:model
    reply = await client.complete_json(system_prompt, user_prompt)
    reply.data  # decoded JSON, or None
"""

from worldmap.llm.clients import (
    AnthropicJsonClient,
    JsonCompletionClient,
    OpenAIJsonClient,
    translate_sdk_error,
)
from worldmap.llm.exceptions import (
    AuthenticationError,
    ContextLengthError,
    LLMError,
    ProviderError,
    RateLimitError,
    UnsupportedProviderError,
)
from worldmap.llm.factory import create_json_client, get_extraction_client
from worldmap.llm.replies import JsonReply, TokenUsage, decode_json_text
from worldmap.llm.retry import NO_RETRY, RetryPolicy, call_with_retry

__all__ = [
    # Clients
    "JsonCompletionClient",
    "OpenAIJsonClient",
    "AnthropicJsonClient",
    "create_json_client",
    "get_extraction_client",
    # Replies
    "JsonReply",
    "TokenUsage",
    "decode_json_text",
    # Retry
    "RetryPolicy",
    "NO_RETRY",
    "call_with_retry",
    # Errors
    "LLMError",
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "ContextLengthError",
    "UnsupportedProviderError",
    "translate_sdk_error",
]
