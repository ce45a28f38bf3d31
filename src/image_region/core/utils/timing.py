"""
Timing helpers for remote calls.
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator

logger = logging.getLogger(__name__)


@contextmanager
def timer(tag: str) -> Generator[dict, None, None]:
    """
    Context manager to measure and log execution time of a remote call.

    Usage:
        with timer("renderCompressed") as t:
            # ... code to time ...
            pass
        print(f"Took {t['ms']}ms")

    Args:
        tag: Name logged with the elapsed time

    Yields:
        Dictionary with 'ms' key containing processing time in milliseconds
    """
    result = {"ms": 0}
    start_time = time.perf_counter()
    try:
        yield result
    finally:
        result["ms"] = int((time.perf_counter() - start_time) * 1000)
        logger.debug(f"{tag} took {result['ms']}ms")
