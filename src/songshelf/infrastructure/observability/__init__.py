"""Observability infrastructure for structured logging."""

from songshelf.infrastructure.observability.logger_template import (
    log_operation,
    log_slow_operation,
)
from songshelf.infrastructure.observability.logging import (
    configure_logging,
    get_session_id,
    set_session_id,
)

__all__ = [
    "configure_logging",
    "get_session_id",
    "log_operation",
    "log_slow_operation",
    "set_session_id",
]
