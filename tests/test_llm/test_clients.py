"""Tests for the JSON completion clients."""

import pytest
import httpx
from unittest.mock import AsyncMock, MagicMock

import anthropic
import openai

from worldmap.llm.clients import AnthropicJsonClient, OpenAIJsonClient, translate_sdk_error
from worldmap.llm.exceptions import (
    AuthenticationError,
    ContextLengthError,
    ProviderError,
    RateLimitError,
)


def _http_response(status_code: int, headers: dict | None = None) -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.headers = headers or {}
    return response


@pytest.fixture
def openai_response():
    """Create a mock Chat Completions response."""
    choice = MagicMock()
    choice.message.content = '{"places": [{"name": "Misty Harbor"}]}'
    response = MagicMock()
    response.choices = [choice]
    response.model = "gpt-4o-mini"
    response.usage = MagicMock(prompt_tokens=10, completion_tokens=5)
    return response


@pytest.fixture
def openai_sdk(openai_response):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=openai_response)
    return client


@pytest.fixture
def anthropic_sdk():
    response = MagicMock()
    response.content = [MagicMock(type="text", text='"places": []}')]
    response.model = "claude-3-5-haiku-20241022"
    response.usage = MagicMock(input_tokens=12, output_tokens=3)
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=response)
    return client


class TestOpenAIJsonClient:
    """Tests for OpenAIJsonClient."""

    @pytest.mark.asyncio
    async def test_decodes_reply(self, openai_sdk):
        client = OpenAIJsonClient(model="gpt-4o-mini", client=openai_sdk)

        reply = await client.complete_json("Return JSON.", "Fog over the docks.")

        assert reply.data == {"places": [{"name": "Misty Harbor"}]}
        assert reply.model == "gpt-4o-mini"
        assert reply.usage.total_tokens == 15

    @pytest.mark.asyncio
    async def test_request_shape(self, openai_sdk):
        client = OpenAIJsonClient(model="gpt-4o", client=openai_sdk)

        await client.complete_json("Return JSON.", "Fog.", max_tokens=256, temperature=0.0)

        kwargs = openai_sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["max_tokens"] == 256
        assert kwargs["temperature"] == 0.0
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"] == [
            {"role": "system", "content": "Return JSON."},
            {"role": "user", "content": "Fog."},
        ]

    @pytest.mark.asyncio
    async def test_empty_content_gives_no_data(self, openai_sdk, openai_response):
        openai_response.choices[0].message.content = None
        client = OpenAIJsonClient(client=openai_sdk)

        reply = await client.complete_json("Return JSON.", "Fog.")

        assert reply.data is None
        assert reply.text == ""

    @pytest.mark.asyncio
    async def test_sdk_errors_are_translated(self):
        sdk = MagicMock()
        sdk.chat.completions.create = AsyncMock(
            side_effect=openai.AuthenticationError(
                message="Invalid API key",
                response=_http_response(401),
                body={"error": {"message": "Invalid API key"}},
            )
        )
        client = OpenAIJsonClient(client=sdk)

        with pytest.raises(AuthenticationError):
            await client.complete_json("Return JSON.", "Fog.")

    def test_provider_name(self):
        assert OpenAIJsonClient(api_key="test-key").provider_name == "openai"


class TestAnthropicJsonClient:
    """Tests for AnthropicJsonClient."""

    @pytest.mark.asyncio
    async def test_prefilled_brace_is_restored(self, anthropic_sdk):
        client = AnthropicJsonClient(client=anthropic_sdk)

        reply = await client.complete_json("Return JSON.", "Fog.")

        assert reply.text == '{"places": []}'
        assert reply.data == {"places": []}
        assert reply.usage.total_tokens == 15

    @pytest.mark.asyncio
    async def test_request_shape(self, anthropic_sdk):
        client = AnthropicJsonClient(model="claude-3-haiku-20240307", client=anthropic_sdk)

        await client.complete_json("Return JSON.", "Fog.")

        kwargs = anthropic_sdk.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-3-haiku-20240307"
        assert kwargs["system"] == "Return JSON."
        assert kwargs["messages"] == [
            {"role": "user", "content": "Fog."},
            {"role": "assistant", "content": "{"},
        ]

    @pytest.mark.asyncio
    async def test_rate_limit_is_translated(self):
        sdk = MagicMock()
        sdk.messages.create = AsyncMock(
            side_effect=anthropic.RateLimitError(
                message="Rate limit exceeded",
                response=_http_response(429, {"retry-after": "3"}),
                body={"error": {"message": "Rate limit exceeded"}},
            )
        )
        client = AnthropicJsonClient(client=sdk)

        with pytest.raises(RateLimitError) as exc_info:
            await client.complete_json("Return JSON.", "Fog.")

        assert exc_info.value.retry_after == 3.0


class TestTranslateSdkError:
    """Tests for translate_sdk_error."""

    def test_context_length(self):
        error = openai.BadRequestError(
            message="This model's maximum context length is 8192 tokens",
            response=_http_response(400),
            body=None,
        )
        assert isinstance(translate_sdk_error(error, openai), ContextLengthError)

    def test_other_bad_request_is_not_retryable(self):
        error = openai.BadRequestError(message="Bad schema", response=_http_response(400), body=None)

        translated = translate_sdk_error(error, openai)

        assert type(translated) is ProviderError
        assert translated.is_retryable is False

    def test_server_error_is_retryable(self):
        error = anthropic.InternalServerError(message="Overloaded", response=_http_response(529), body=None)

        translated = translate_sdk_error(error, anthropic)

        assert translated.is_retryable is True
        assert translated.status_code == 529

    def test_connection_error_is_retryable(self):
        error = openai.APIConnectionError(request=MagicMock(spec=httpx.Request))

        assert translate_sdk_error(error, openai).is_retryable is True
