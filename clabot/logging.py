"""Logging from config and env.

Levels (inclusive):
- ERROR: failed reads (labels, PR, statuses) and search failures
- WARNING: failed label mutations and ERROR
- INFO: reconciliation progress, WARNING, and ERROR
- DEBUG: skipped events and all levels above

Configure via config.yaml (logging.level, logging.format) or env (LOGGING_LEVEL, LOGGING_FORMAT).
"""

import logging

from clabot.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class ClabotLogging:
    """Configures root logger from LoggingConfig (YAML + env LOGGING_*)."""

    def __init__(self, config: LoggingConfig) -> None:
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        """Apply level and format to the root logger.

        urllib3 (under requests) logs every GitHub call at DEBUG; it is kept
        at WARNING unless clabot itself runs at DEBUG.
        """
        logging.basicConfig(
            level=self._level,
            format=self._format,
            force=True,
        )
        logging.getLogger("urllib3").setLevel(self._level if self._level == logging.DEBUG else logging.WARNING)
