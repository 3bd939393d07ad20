#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Retry policy with fixed-attempt backoff for reader queries."""

from __future__ import annotations

import os
import random
import time
from typing import Any, Callable, Optional, TypeVar

from .logging_config import get_logger
from .query_errors import is_query_error

T = TypeVar('T')

logger = get_logger(__name__)


def _always(_error: Exception) -> bool:
    return True


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_base: float = 2.0,
        jitter: bool = False,
        is_retryable: Callable[[Exception], bool] = _always,
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Total number of attempts, first one included
            initial_delay: Delay in seconds before the first retry
            max_delay: Maximum delay between retries
            exponential_base: Base for exponential backoff calculation
            jitter: Whether to add random jitter on top of the delay
            is_retryable: Predicate selecting the errors worth another attempt
        """
        self.max_attempts = max(1, max_attempts)
        self.initial_delay = max(0.0, initial_delay)
        self.max_delay = max(self.initial_delay, max_delay)
        self.exponential_base = max(1.0, exponential_base)
        self.jitter = jitter
        self.is_retryable = is_retryable

    @classmethod
    def from_env(cls, prefix: str, **defaults: Any) -> "RetryConfig":
        """Build a config from ``<PREFIX>_*`` environment variables.

        Keyword arguments give the defaults for anything not set.
        """
        base = cls(**defaults)
        return cls(
            max_attempts=int(os.getenv(f"{prefix}_MAX_ATTEMPTS", str(base.max_attempts))),
            initial_delay=float(os.getenv(f"{prefix}_INITIAL_DELAY", str(base.initial_delay))),
            max_delay=float(os.getenv(f"{prefix}_MAX_DELAY", str(base.max_delay))),
            exponential_base=base.exponential_base,
            jitter=base.jitter,
            is_retryable=base.is_retryable,
        )

    def get_delay(self, attempt: int) -> float:
        """
        Calculate delay after the given failed attempt.

        Args:
            attempt: Attempt number (0-indexed)

        Returns:
            Delay in seconds
        """
        delay = self.initial_delay * (self.exponential_base ** attempt)
        delay = min(delay, self.max_delay)

        if self.jitter and delay > 0:
            # up to +50%, never below the base delay
            delay += random.uniform(0.0, delay * 0.5)

        return delay


def should_retry(error: Exception, attempt: int, config: RetryConfig) -> bool:
    """
    Determine if operation should be retried.

    Args:
        error: Exception that occurred
        attempt: Current attempt number (0-indexed)
        config: Retry configuration

    Returns:
        True if should retry, False otherwise
    """
    if attempt >= config.max_attempts - 1:
        return False
    return bool(config.is_retryable(error))


def retry_with_backoff(
    func: Callable[..., T],
    *args: Any,
    config: Optional[RetryConfig] = None,
    sleep: Callable[[float], None] = time.sleep,
    **kwargs: Any,
) -> T:
    """
    Execute function with retry and backoff.

    Args:
        func: Function to execute
        *args: Positional arguments for function
        config: Retry configuration (defaults to ``RetryConfig()``)
        sleep: Suspension used between attempts
        **kwargs: Keyword arguments for function

    Returns:
        Function return value

    Raises:
        The last exception once retries are exhausted or the error is not retryable
    """
    if config is None:
        config = RetryConfig()

    for attempt in range(config.max_attempts):
        try:
            return func(*args, **kwargs)
        except Exception as error:
            if not should_retry(error, attempt, config):
                raise

            delay = config.get_delay(attempt)
            logger.warning(
                "attempt %d/%d failed (%s), retrying in %.1fs",
                attempt + 1,
                config.max_attempts,
                error,
                delay,
            )
            if delay > 0:
                sleep(delay)

    raise RuntimeError("Retry logic error: no attempts executed")


# "report not found" is transient until the reader has processed the input
REPORT_RETRY = RetryConfig(
    max_attempts=3,
    initial_delay=2.0,
    max_delay=15.0,
    exponential_base=2.0,
    jitter=False,
    is_retryable=is_query_error,
)
