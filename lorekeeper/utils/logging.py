"""Logging setup for the command line."""

import logging
import sys

import structlog

LOG_LEVELS = [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL]
"""Levels from most to least verbose."""

DEFAULT_LOG_LEVEL = logging.WARNING
"""Level used when no verbosity flag is given."""


def log_level_for_verbosity(verbosity: int) -> int:
    """Map the number of `-v` flags to a log level, capped at DEBUG."""
    default_index = LOG_LEVELS.index(DEFAULT_LOG_LEVEL)
    return LOG_LEVELS[max(default_index - max(verbosity, 0), 0)]


def verbosity_usage() -> str:
    """Describe the log level reached by each repetition of `-v`."""
    default_index = LOG_LEVELS.index(DEFAULT_LOG_LEVEL)
    levels = [logging.getLevelName(level) for level in reversed(LOG_LEVELS[:default_index])]
    return "Increase the verbosity of the log output on stderr. " + ", ".join(f"-{'v' * (idx + 1)} = {level}" for idx, level in enumerate(levels))


def configure_logging(verbosity: int) -> None:
    """Configure structlog to write human readable events to stderr."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level_for_verbosity(verbosity)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
