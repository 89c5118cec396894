"""Builds the JSON completion client named by a 'provider:model' setting."""

from worldmap.config import ProviderConfig, settings
from worldmap.llm.clients import AnthropicJsonClient, JsonCompletionClient, OpenAIJsonClient
from worldmap.llm.exceptions import UnsupportedProviderError


def create_json_client(config: ProviderConfig) -> JsonCompletionClient:
    """Create a client for a parsed provider config.

    Raises:
        UnsupportedProviderError: If the provider has no client.
    """
    if config.provider == "openai":
        return OpenAIJsonClient(
            model=config.model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
        )
    if config.provider == "anthropic":
        return AnthropicJsonClient(model=config.model, api_key=settings.anthropic_api_key)
    raise UnsupportedProviderError(f"No JSON client for provider '{config.provider}'")


def get_extraction_client() -> JsonCompletionClient:
    """Client for map fact extraction, from the EXTRACTION setting."""
    return create_json_client(settings.extraction_config)
