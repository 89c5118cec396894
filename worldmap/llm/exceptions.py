"""Errors raised by the JSON completion clients.

Every SDK failure is translated into one of these before it leaves
worldmap.llm, so callers never import anthropic or openai exception types.
"""


class LLMError(Exception):
    """Base class for completion failures."""


class ProviderError(LLMError):
    """The provider rejected or failed the request.

    Attributes:
        is_retryable: True for transient failures (5xx, dropped connections).
        status_code: HTTP status, when the provider sent one.
    """

    def __init__(self, message: str, is_retryable: bool = False, status_code: int | None = None) -> None:
        super().__init__(message)
        self.is_retryable = is_retryable
        self.status_code = status_code


class RateLimitError(ProviderError):
    """HTTP 429. retry_after carries the server's hint in seconds, if any."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: float | None = None) -> None:
        super().__init__(message, is_retryable=True, status_code=429)
        self.retry_after = retry_after


class AuthenticationError(ProviderError):
    """Missing or rejected API key."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, status_code=401)


class ContextLengthError(ProviderError):
    """Scene and prompt together exceed the model's context window."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


class UnsupportedProviderError(LLMError):
    """The configured provider prefix has no client."""
