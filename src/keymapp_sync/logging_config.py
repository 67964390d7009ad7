"""
logging_config.py - Logging setup for the keymapp-sync command.

Sync runs log at INFO with an "event" extra field naming the step
(fetch_revision, fetch_metadata, sync_completed). The JSON formatter
puts those fields at the top level of each line.
"""

import json
import logging
from enum import Enum

_PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class LogLevel(str, Enum):
    """Levels accepted by --log-level."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with extra fields merged in."""

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.include_extra:
            entry.update(
                (key, value) for key, value in vars(record).items()
                if key not in _RECORD_ATTRS
            )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: LogLevel | str = LogLevel.WARNING, json_format: bool = False) -> None:
    """
    Send keymapp_sync logs to stderr.

    Args:
        level: A LogLevel or its name; unknown names raise ValueError
        json_format: Use JSONFormatter instead of plain text
    """
    level = LogLevel(level.upper())

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(_PLAIN_FORMAT))

    logger = logging.getLogger("keymapp_sync")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level.value)
