from __future__ import annotations

import time
from typing import Callable, TypeVar

from replypilot.log import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


def with_retry(
    fn: Callable[[], T],
    max_attempts: int = 3,
    initial_delay_ms: float = 1000,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``fn`` until it succeeds, at most ``max_attempts`` times.

    After failed attempt i (0-based) waits initial_delay_ms * 2**i before the
    next one. Every exception counts as retryable. The last failure is
    re-raised as-is; there is no wait after it.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    delay_ms = initial_delay_ms
    for attempt in range(max_attempts):
        try:
            return fn()
        except Exception as e:
            if attempt == max_attempts - 1:
                raise
            logger.warning(
                "API call failed (attempt %d/%d), retrying in %ss... %s",
                attempt + 1, max_attempts, delay_ms / 1000, e,
            )
            sleep(delay_ms / 1000)
            delay_ms *= 2
