"""Root logger and access-log setup for the issue tracker.

Loggers used by the service:
- issuetracker.main, issuetracker.api.server: startup, handled 500s with traceback
- issuetracker.store: one INFO line per created, updated or deleted issue
- issuetracker.api.handlers: DEBUG line per rejected create/update
- issuetracker.api.access: one INFO line per HTTP request, off unless
  logging.access_log (env LOGGING_ACCESS_LOG) is true

Level and format come from logging.level / logging.format (env LOGGING_LEVEL,
LOGGING_FORMAT). Unknown level names fall back to INFO.
"""

import logging

from issuetracker.config import LoggingConfig

ACCESS_LOGGER = "issuetracker.api.access"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str) -> int:
    return LEVELS.get(level.upper().strip(), logging.INFO)


class IssueTrackerLogging:
    """Applies LoggingConfig to the root logger and the access logger."""

    def __init__(self, config: LoggingConfig) -> None:
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT
        self._access_log = config.access_log

    def setup(self) -> None:
        """Configure root handler, then enable or silence request lines."""
        logging.basicConfig(level=self._level, format=self._format, force=True)
        # Access lines are INFO; WARNING hides them without touching other loggers
        access_level = logging.NOTSET if self._access_log else logging.WARNING
        logging.getLogger(ACCESS_LOGGER).setLevel(access_level)
