"""Fixed-interval retry for single request attempts."""

import logging
import time
from typing import Callable, TypeVar

from .errors import HttpStatusError, TransportError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
RETRY_INTERVAL = 3.0  # seconds, constant between attempts

T = TypeVar("T")


def retry(work: Callable[[], T], attempts: int = MAX_ATTEMPTS, interval: float = RETRY_INTERVAL) -> T:
    """Call work until it succeeds or attempts run out.

    work performs exactly one attempt. Transport failures and classified HTTP
    errors are retried alike, a 404 as eagerly as a refused connection. After
    the last attempt the final error is re-raised as is. Anything else work
    raises (DecodeError included) propagates immediately.
    """
    for attempt in range(1, attempts + 1):
        try:
            return work()
        except (TransportError, HttpStatusError) as e:
            if attempt >= attempts:
                raise
            logger.warning("%s, retry %d/%d in %.1fs", e, attempt, attempts - 1, interval)
            time.sleep(interval)
    raise ValueError(f"attempts must be at least 1, got {attempts}")
