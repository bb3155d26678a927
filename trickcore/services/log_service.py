"""Structured key=value logging for round and match events."""

import logging

logger = logging.getLogger(__name__)


def format_event(data: dict[str, object]) -> str:
    """Render a payload as `key=value | key=value`."""
    return " | ".join(f"{k}={v}" for k, v in data.items())


class LogService:
    """Emits one log line per event payload.

    Callers pass the event name and its fields as a single dict so that
    round and match summaries read the same across components.
    """

    def __init__(self, name: str | None = None) -> None:
        """Initialize the service.

        Args:
            name: Logger name, defaults to this module's logger

        """
        self._logger = logging.getLogger(name) if name else logger

    def info(self, data: dict[str, object]) -> None:
        """Log an info event."""
        self._logger.info(format_event(data))

    def warning(self, data: dict[str, object]) -> None:
        """Log a warning event."""
        self._logger.warning(format_event(data))
