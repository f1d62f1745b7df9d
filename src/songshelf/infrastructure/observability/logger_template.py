"""Shared logging helpers for timed operations.

Hey future me - use these instead of hand-rolled "started/finished in X ms" logs so every
operation logs the same way.

USAGE:
    from songshelf.infrastructure.observability.logger_template import (
        log_operation,
        log_slow_operation,
    )

    with log_operation(logger, "catalog_normalize", records=len(raw)):
        report = normalizer.normalize_catalog(raw)
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


# Yo, this context manager logs start/end with automatic duration tracking! The **context
# args go into both log lines as extra fields. On exception it logs {operation}.failed with
# exc_info=True and RE-RAISES - it never swallows anything. It's a plain (sync) context manager
# on purpose: the catalog fetch is awaited INSIDE the with block, and the timing still works.
@contextmanager
def log_operation(
    logger: logging.Logger,
    operation: str,
    **context: Any,
) -> Iterator[None]:
    """Context manager for logging operation start/end with automatic timing.

    Logs:
    - {operation}.started with context fields
    - {operation}.completed with context + duration_ms
    - {operation}.failed with context + duration_ms + error details (if exception)

    Args:
        logger: Logger instance (use logging.getLogger(__name__))
        operation: Operation name (e.g., "catalog_load", "catalog_normalize")
        **context: Additional fields to include in logs

    Example:
        >>> with log_operation(logger, "catalog_load", source="songs.json"):
        ...     raw = await source.fetch_raw_songs()

        # Logs:
        # INFO: catalog_load.started {"source": "songs.json"}
        # INFO: catalog_load.completed {"source": "songs.json", "duration_ms": 12}
    """
    start = time.perf_counter()
    logger.info(f"{operation}.started", extra=context)

    try:
        yield
    except Exception as e:
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.error(
            f"{operation}.failed",
            extra={
                **context,
                "duration_ms": duration_ms,
                "error": str(e),
                "error_type": type(e).__name__,
            },
            exc_info=True,
        )
        raise

    duration_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        f"{operation}.completed",
        extra={**context, "duration_ms": duration_ms},
    )


# Yo, this is the slow-operation tripwire! The browser calls it after each refresh: facet
# counts are O(options x songs), so a big catalog can make clicks feel sluggish. Nothing is
# logged under the threshold.
def log_slow_operation(
    logger: logging.Logger,
    operation: str,
    duration_ms: int,
    threshold_ms: int = 100,
    **context: Any,
) -> None:
    """Log warning if operation exceeded threshold.

    Args:
        logger: Logger instance
        operation: Operation name
        duration_ms: Actual operation duration
        threshold_ms: Threshold for "slow" (default: 100ms)
        **context: Additional fields (e.g., intent, result_count)
    """
    if duration_ms > threshold_ms:
        logger.warning(
            "operation.slow",
            extra={
                **context,
                "operation": operation,
                "duration_ms": duration_ms,
                "threshold_ms": threshold_ms,
            },
        )
