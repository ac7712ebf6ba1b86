"""Log event types for structured logging."""

from enum import StrEnum


class LogEvent(StrEnum):
    """Log event types for podbind.

    Used with logger.info/debug extra dict:
        logger.info("message", extra={"event": LogEvent.SECRET_CREATED, ...})
    """

    # Connection lifecycle
    CONNECTION_OPENED = "connection_opened"
    CONNECTION_CLOSED = "connection_closed"

    # Secret events
    SECRET_LISTED = "secret_listed"
    SECRET_INSPECTED = "secret_inspected"
    SECRET_CREATED = "secret_created"
    SECRET_REMOVED = "secret_removed"
