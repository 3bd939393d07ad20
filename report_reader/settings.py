#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Environment configuration for the command line tools."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .retry_policy import REPORT_RETRY, RetryConfig

DEFAULT_GRAPHQL_URL = "http://localhost:4000/graphql"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    graphql_url: str
    timeout: float
    report_retry: RetryConfig
    log_level: str = "INFO"
    log_path: Optional[Path] = None


def load_settings() -> Settings:
    """Read ``.env`` (if any) and the environment."""
    load_dotenv()

    log_path = os.getenv("LOG_PATH")
    return Settings(
        graphql_url=os.getenv("READER_GRAPHQL_URL", DEFAULT_GRAPHQL_URL),
        timeout=float(os.getenv("READER_TIMEOUT", str(DEFAULT_TIMEOUT))),
        report_retry=RetryConfig.from_env(
            "REPORT_RETRY",
            max_attempts=REPORT_RETRY.max_attempts,
            initial_delay=REPORT_RETRY.initial_delay,
            max_delay=REPORT_RETRY.max_delay,
            exponential_base=REPORT_RETRY.exponential_base,
            jitter=REPORT_RETRY.jitter,
            is_retryable=REPORT_RETRY.is_retryable,
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_path=Path(log_path) if log_path else None,
    )
