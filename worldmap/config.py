"""Application configuration using pydantic-settings."""

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, get_args

from pydantic_settings import BaseSettings, SettingsConfigDict


ProviderType = Literal["anthropic", "openai"]


@dataclass
class ProviderConfig:
    """Parsed provider:model configuration."""

    provider: ProviderType
    model: str


def parse_provider_config(value: str, default_provider: ProviderType = "openai") -> ProviderConfig:
    """Parse 'provider:model' format into ProviderConfig.

    Args:
        value: String in format 'provider:model' or just 'model'.
        default_provider: Provider to use if only model is specified.

    Returns:
        ProviderConfig with provider and model.

    Examples:
        >>> parse_provider_config("openai:gpt-4o-mini")
        ProviderConfig(provider='openai', model='gpt-4o-mini')

        >>> parse_provider_config("anthropic:claude-3-5-haiku-20241022")
        ProviderConfig(provider='anthropic', model='claude-3-5-haiku-20241022')

        >>> parse_provider_config("gpt-4o")  # No provider prefix
        ProviderConfig(provider='openai', model='gpt-4o')
    """
    prefix, sep, model = value.partition(":")
    if sep and prefix in get_args(ProviderType):
        return ProviderConfig(provider=prefix, model=model)  # type: ignore[arg-type]
    return ProviderConfig(provider=default_provider, model=value)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite:///worldmap.db"

    # API Keys
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    openai_base_url: str | None = None  # Custom endpoint for OpenAI-compatible APIs

    # ==========================================================================
    # Fact Extraction (provider:model format)
    # ==========================================================================
    # Examples:
    #   EXTRACTION=openai:gpt-4o-mini
    #   EXTRACTION=anthropic:claude-3-5-haiku-20241022
    extraction: str = "openai:gpt-4o-mini"
    extraction_max_tokens: int = 1024

    # ==========================================================================
    # World Map
    # ==========================================================================
    map_slot_key: str = "adventure_map"

    # Layout relaxation
    layout_iterations: int = 80
    layout_spring_length: float = 0.18  # Offset per unit of relation distance
    layout_spring_step: float = 0.08  # Fraction of the way toward the target per iteration
    layout_min_separation: float = 0.07
    layout_seed_jitter: float = 0.12  # Width of the square new places are scattered in

    # Facts sanitization
    max_name_length: int = 60
    max_tags: int = 6
    max_notes_length: int = 140

    # Debug
    debug: bool = False

    @property
    def extraction_config(self) -> ProviderConfig:
        """Get parsed extraction provider config."""
        return parse_provider_config(self.extraction)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience alias
settings = get_settings()
