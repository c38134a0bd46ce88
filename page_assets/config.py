"""Configuration objects and constants for image probing."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger("page_assets")

DEFAULT_PROBE_TIMEOUT = 5.0
TIMEOUT_ENV_VAR = "PAGE_ASSETS_PROBE_TIMEOUT"
MAX_CONCURRENCY_ENV_VAR = "PAGE_ASSETS_MAX_CONCURRENCY"


def is_valid_timeout(value: float) -> bool:
    return math.isfinite(value) and value > 0


@dataclass
class ProbeConfig:
    """Settings that control how discovered images are verified.

    ``max_concurrency`` of ``None`` starts every probe at once.
    """

    timeout: float = DEFAULT_PROBE_TIMEOUT
    max_concurrency: Optional[int] = None

    def __post_init__(self) -> None:
        if not is_valid_timeout(self.timeout):
            raise ValueError(
                f"timeout must be a positive finite number, got {self.timeout}"
            )
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ValueError(
                f"max_concurrency must be at least 1, got {self.max_concurrency}"
            )

    @classmethod
    def from_env(cls) -> "ProbeConfig":
        """Build a config from environment overrides, ignoring bad values."""
        timeout = DEFAULT_PROBE_TIMEOUT
        raw_timeout = os.getenv(TIMEOUT_ENV_VAR)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
                if not is_valid_timeout(timeout):
                    raise ValueError(raw_timeout)
            except ValueError:
                logger.warning(
                    "%s is set to %r which is not a positive finite number; using %s",
                    TIMEOUT_ENV_VAR,
                    raw_timeout,
                    DEFAULT_PROBE_TIMEOUT,
                )
                timeout = DEFAULT_PROBE_TIMEOUT

        max_concurrency: Optional[int] = None
        raw_limit = os.getenv(MAX_CONCURRENCY_ENV_VAR)
        if raw_limit:
            try:
                max_concurrency = int(raw_limit)
                if max_concurrency < 1:
                    raise ValueError(raw_limit)
            except ValueError:
                logger.warning(
                    "%s is set to %r which is not a positive integer; probing without a limit",
                    MAX_CONCURRENCY_ENV_VAR,
                    raw_limit,
                )
                max_concurrency = None

        return cls(timeout=timeout, max_concurrency=max_concurrency)
