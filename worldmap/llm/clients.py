"""JSON completion clients for OpenAI and Anthropic.

Map extraction needs exactly one kind of call: a system prompt and a user
prompt in, one JSON object out. Each client makes that call with its SDK,
decodes the reply, and translates SDK errors into worldmap.llm.exceptions.
"""

import logging
from types import ModuleType

import anthropic
import openai

from worldmap.llm.exceptions import (
    AuthenticationError,
    ContextLengthError,
    LLMError,
    ProviderError,
    RateLimitError,
)
from worldmap.llm.replies import JsonReply, TokenUsage, decode_json_text

logger = logging.getLogger(__name__)


def _retry_after(error: Exception) -> float | None:
    response = getattr(error, "response", None)
    headers = getattr(response, "headers", None) or {}
    try:
        return float(headers.get("retry-after"))
    except (TypeError, ValueError):
        return None


def translate_sdk_error(error: Exception, sdk: ModuleType) -> LLMError:
    """Map an anthropic/openai exception onto our error types.

    Both SDKs share the same exception names, so the module is passed in.
    """
    message = str(error)
    if isinstance(error, sdk.AuthenticationError):
        return AuthenticationError(message)
    if isinstance(error, sdk.RateLimitError):
        return RateLimitError(message, retry_after=_retry_after(error))
    if isinstance(error, sdk.BadRequestError):
        lowered = message.lower()
        if "context" in lowered or "token" in lowered:
            return ContextLengthError(message)
        return ProviderError(message, status_code=400)
    if isinstance(error, sdk.APIStatusError):
        status = error.status_code
        return ProviderError(message, is_retryable=status >= 500, status_code=status)
    if isinstance(error, sdk.APIConnectionError):
        return ProviderError(message, is_retryable=True)
    return ProviderError(message)


class JsonCompletionClient:
    """Base client: one request shape, one decoded reply.

    Subclasses set provider_name and _sdk and implement _request.
    """

    provider_name = ""
    _sdk: ModuleType

    def __init__(self, model: str) -> None:
        self.model = model

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 1024,
        temperature: float = 0.2,
    ) -> JsonReply:
        """Ask for a single JSON object.

        Args:
            system_prompt: Instructions and schema.
            user_prompt: The scene to read.
            max_tokens: Reply budget.
            temperature: Sampling temperature.

        Returns:
            JsonReply whose data is None when the reply held no JSON.

        Raises:
            LLMError: A translated SDK failure.
        """
        try:
            text, model, usage = await self._request(system_prompt, user_prompt, max_tokens, temperature)
        except self._sdk.APIError as e:
            raise translate_sdk_error(e, self._sdk) from e

        reply = JsonReply(data=decode_json_text(text), text=text, model=model or self.model, usage=usage)
        if usage is not None:
            logger.debug(f"{self.provider_name}:{reply.model} used {usage.total_tokens} tokens")
        return reply

    async def _request(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> tuple[str, str, TokenUsage | None]:
        raise NotImplementedError


class OpenAIJsonClient(JsonCompletionClient):
    """Chat Completions in JSON mode. Works with OpenAI-compatible servers via base_url."""

    provider_name = "openai"
    _sdk = openai

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        base_url: str | None = None,
        client: openai.AsyncOpenAI | None = None,
    ) -> None:
        super().__init__(model)
        self._api_key = api_key
        self._base_url = base_url
        self._client = client

    def _get_client(self) -> openai.AsyncOpenAI:
        # Built lazily: the SDK refuses to construct without a key
        if self._client is None:
            self._client = openai.AsyncOpenAI(api_key=self._api_key or None, base_url=self._base_url or None)
        return self._client

    async def _request(self, system_prompt, user_prompt, max_tokens, temperature):
        response = await self._get_client().chat.completions.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        usage = None
        if response.usage:
            usage = TokenUsage(response.usage.prompt_tokens, response.usage.completion_tokens)
        return response.choices[0].message.content or "", response.model, usage


class AnthropicJsonClient(JsonCompletionClient):
    """Messages API with the reply prefilled with '{' in place of a JSON mode."""

    provider_name = "anthropic"
    _sdk = anthropic

    def __init__(
        self,
        model: str = "claude-3-5-haiku-20241022",
        api_key: str | None = None,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        super().__init__(model)
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self._api_key or None)
        return self._client

    async def _request(self, system_prompt, user_prompt, max_tokens, temperature):
        response = await self._get_client().messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system_prompt,
            messages=[
                {"role": "user", "content": user_prompt},
                {"role": "assistant", "content": "{"},
            ],
        )
        text = "".join(block.text for block in response.content if block.type == "text")
        usage = None
        if response.usage:
            usage = TokenUsage(response.usage.input_tokens, response.usage.output_tokens)
        return "{" + text, response.model, usage
