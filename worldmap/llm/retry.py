"""Backoff for transient completion failures."""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from worldmap.llm.exceptions import ProviderError, RateLimitError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how patiently to retry one completion.

    Attributes:
        max_retries: Extra attempts after the first one.
        base_delay: Wait before the first retry, in seconds.
        max_delay: Upper bound for any single wait.
        jitter: Add up to 25% random slack to each wait.
    """

    max_retries: int = 2
    base_delay: float = 1.0
    max_delay: float = 30.0
    jitter: bool = True

    def delay_for(self, attempt: int, retry_after: float | None = None) -> float:
        """Seconds to wait after the given failed attempt (0-indexed).

        The wait doubles per attempt, is capped at max_delay, and is never
        shorter than a server-provided retry_after.
        """
        delay = min(self.base_delay * 2**attempt, self.max_delay)
        if retry_after is not None:
            delay = max(delay, retry_after)
        if self.jitter:
            delay += random.uniform(0, delay * 0.25)
        return delay


NO_RETRY = RetryPolicy(max_retries=0, jitter=False)


def _is_transient(error: ProviderError) -> bool:
    return isinstance(error, RateLimitError) or error.is_retryable


async def call_with_retry(
    call: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
) -> T:
    """Await call(), retrying rate limits and retryable provider errors.

    Args:
        call: Zero-argument coroutine factory, invoked once per attempt.
        policy: Retry policy. Defaults to RetryPolicy().

    Returns:
        The first successful result.

    Raises:
        ProviderError: The last failure, once retries are used up, or any
            non-transient failure immediately.
    """
    policy = policy or RetryPolicy()
    attempt = 0
    while True:
        try:
            return await call()
        except ProviderError as e:
            if not _is_transient(e) or attempt >= policy.max_retries:
                raise
            delay = policy.delay_for(attempt, getattr(e, "retry_after", None))
            logger.warning(f"Completion failed ({e}); retry {attempt + 1}/{policy.max_retries} in {delay:.1f}s")
            attempt += 1
            await asyncio.sleep(delay)
