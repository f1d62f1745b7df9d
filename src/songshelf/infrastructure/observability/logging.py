"""Structured logging configuration with JSON formatting and browse session IDs."""

import contextvars
import logging
import sys
import traceback
import uuid
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

# Hey future me, the session ID ties every log line of one browse session together (catalog
# load, normalization warnings, every refresh after an intent). When someone reports "the
# counts looked wrong", grep for their session_id and you see the whole story. contextvars is
# asyncio-safe, so the startup fetch and the sync intent handlers all see the same value.
# default="" covers logs emitted before a session exists.
session_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("session_id", default="")


def get_session_id() -> str:
    """Get the current browse session ID from context.

    Returns:
        Current session ID or empty string if not set
    """
    return session_id_var.get()


# Listen up, this setter AUTO-GENERATES a UUID if session_id is None! Call it once when a
# CatalogBrowser is created, not per intent - otherwise every refresh gets a new ID.
def set_session_id(session_id: str | None = None) -> str:
    """Set the browse session ID in context.

    Args:
        session_id: Session ID to set. If None, generates a new UUID

    Returns:
        The session ID that was set
    """
    if session_id is None:
        session_id = str(uuid.uuid4())
    session_id_var.set(session_id)
    return session_id


# Hey future me, this filter INJECTS session_id into EVERY log record so formatters can use
# %(session_id)s. Returning False would DROP the record - always return True. It runs for
# every log call, so no heavy work in here.
class SessionIdFilter(logging.Filter):
    """Add session ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = get_session_id()
        return True


class CompactExceptionFormatter(logging.Formatter):
    """Formatter that shows compact exception chains without traceback boilerplate.

    Hey future me - no "The above exception was the direct cause of..." noise. Each exception
    in the chain gets one ╰─► header line, root cause first, followed by only the songshelf
    frames (library and stdlib frames are skipped).

    Example output:
    ERROR │ songshelf.infrastructure.lifecycle:88 │ catalog_load.failed
    ╰─► ConnectError: All connection attempts failed
    ╰─► CatalogLoadError: Failed to fetch catalog from https://example.org/songs.json
        File "http_catalog_source.py", line 71, in fetch_raw_songs
          raise CatalogLoadError(
    """

    def formatException(self, ei: Any) -> str:
        """Format exception chain in a compact, readable way.

        Args:
            ei: Exception info tuple (type, value, traceback)

        Returns:
            Formatted exception string with compact chain representation
        """
        _exc_type, exc_value, _exc_tb = ei
        if exc_value is None:
            return ""

        # Walk the chain (__cause__ explicit, __context__ implicit), then show root cause first
        exceptions: list[BaseException] = []
        current: BaseException | None = exc_value
        while current is not None and current not in exceptions:
            exceptions.append(current)
            current = current.__cause__ or current.__context__
        exceptions.reverse()

        lines: list[str] = []
        for exc in exceptions:
            lines.append(f"╰─► {exc.__class__.__name__}: {exc}")
            if not exc.__traceback__:
                continue
            for frame in traceback.extract_tb(exc.__traceback__):
                if "/site-packages/" in frame.filename or "songshelf" not in frame.filename:
                    continue
                lines.append(
                    f'    File "{Path(frame.filename).name}", line {frame.lineno}, in {frame.name}'
                )
                if frame.line:
                    lines.append(f"      {frame.line.strip()}")

        return "\n".join(lines)


class CustomJsonFormatter(jsonlogger.JsonFormatter):  # type: ignore[name-defined,misc]
    """Custom JSON formatter with additional fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: Dictionary to be logged as JSON
            record: Python logging record
            message_dict: Message dictionary from format string
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        session_id = getattr(record, "session_id", "")
        if session_id:
            log_record["session_id"] = session_id

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)


# Listen future me, this is THE logging setup function - call it ONCE at startup (lifecycle
# does it in bootstrap_browser). It replaces existing root handlers, which matters for tests
# that call it repeatedly. json_format=True for log shipping, False for humans. httpx/httpcore
# are quieted, otherwise the one catalog fetch drowns in connection-pool chatter.
def configure_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    app_name: str = "songshelf",
) -> None:
    """Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON format for logs
        app_name: Application name to include in logs
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(SessionIdFilter())

    if json_format:
        formatter: logging.Formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        # timestamp | level | module:line | message, exceptions with ╰─► markers
        formatter = CompactExceptionFormatter(
            fmt="%(asctime)s │ %(levelname)-7s │ %(name)s:%(lineno)d │ %(message)s",
            datefmt="%H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured",
        extra={
            "app_name": app_name,
            "log_level": log_level,
            "json_format": json_format,
        },
    )
