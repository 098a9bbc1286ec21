"""Logging for CI runs, from config and env.

A run is a handful of API calls, so INFO shows one line per step (lookup,
note patches, PR update) and DEBUG adds every request with its URL. The
HTTP stack (urllib3 connection pool) only speaks at DEBUG; on any other
level it is held at WARNING so CI output stays readable.

Configure via config.yaml (logging.level, logging.format) or env (LOGGING_LEVEL, LOGGING_FORMAT).
"""

import logging

from notionbot.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers of the HTTP libraries under requests
HTTP_LOGGERS = ("urllib3", "requests")


def _resolve_level(level: str) -> int:
    """Map level name to logging constant, INFO if unknown."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


class NotionbotLogging:
    """Configures root and HTTP library loggers from LoggingConfig."""

    def __init__(self, config: LoggingConfig) -> None:
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        """Apply level and format to the root logger, quiet HTTP libraries
        unless debugging."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            force=True,
        )
        http_level = logging.DEBUG if self._level <= logging.DEBUG else logging.WARNING
        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(http_level)
