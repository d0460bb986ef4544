"""Append-only event log shared by the store and the menu.

Each event is one line: ``YYYY-MM-DD HH:MM:SS - message``. The log is
never read back.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

_EVENT_FORMAT = "%(asctime)s - %(message)s"
_EVENT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _EventFileHandler(logging.FileHandler):
    """FileHandler that reports write failures through the module logger."""

    def handleError(self, record: logging.LogRecord) -> None:
        logger.warning("Could not write event to %s: %s", self.baseFilename, sys.exc_info()[1])


class EventLog:
    """Write-only event sink backed by a private logging handler.

    The handler is not attached to any logger, so two stores in the same
    process never write into each other's log. ``EventLog(None)`` discards
    every event.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        if path is None:
            self._handler: logging.Handler = logging.NullHandler()
        else:
            self._handler = _EventFileHandler(path, mode="a", encoding="utf-8", delay=True)
            self._handler.setFormatter(logging.Formatter(_EVENT_FORMAT, datefmt=_EVENT_DATEFMT))

    def record(self, message: str) -> None:
        """Append one event. Failures are reported, never raised."""
        event = logging.makeLogRecord(
            {"name": "sprout.events", "levelno": logging.INFO, "levelname": "INFO", "msg": message}
        )
        try:
            if self.path is not None:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self._handler.handle(event)
        except OSError as e:
            logger.warning("Could not write event to %s: %s", self.path, e)

    def close(self) -> None:
        self._handler.close()

    def __enter__(self) -> EventLog:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
