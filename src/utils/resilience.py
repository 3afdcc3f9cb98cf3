"""
Exam Prep API - Resilience Patterns
Exponential backoff retry for upstream reads
"""
import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from config.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""
    max_attempts: int = 3
    base_delay: float = 0.5
    max_delay: float = 8.0
    exponential_base: float = 2.0
    jitter: bool = True  # Spread retries from concurrent fetches
    retryable_exceptions: Tuple[type, ...] = (Exception,)

    @classmethod
    def from_settings(cls) -> "RetryConfig":
        """Create config from application settings."""
        settings = get_settings()
        return cls(
            max_attempts=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay,
            max_delay=settings.retry_max_delay,
            exponential_base=settings.retry_exponential_base
        )

    def delay_for(self, attempt: int) -> float:
        """Backoff delay after the given zero-based attempt."""
        delay = min(
            self.base_delay * (self.exponential_base ** attempt),
            self.max_delay
        )
        if self.jitter:
            delay = delay * (0.5 + random.random())
        return delay


async def retry_with_backoff(
    func: Callable,
    config: Optional[RetryConfig] = None,
    *args,
    **kwargs
) -> Any:
    """
    Execute function with exponential backoff retry.

    Args:
        func: Async function to execute
        config: Retry configuration (uses settings defaults if None)
        *args, **kwargs: Arguments to pass to function

    Returns:
        Function result if successful

    Raises:
        Exception: Last exception if all retries fail
    """
    if config is None:
        config = RetryConfig.from_settings()

    attempts = max(1, config.max_attempts)
    last_exception = None

    for attempt in range(attempts):
        try:
            return await func(*args, **kwargs)
        except config.retryable_exceptions as e:
            last_exception = e

            if attempt < attempts - 1:
                delay = config.delay_for(attempt)
                logger.warning(
                    f"[Retry] Attempt {attempt + 1}/{attempts} failed: {e}. "
                    f"Retrying in {delay:.2f}s"
                )
                await asyncio.sleep(delay)

    raise last_exception

