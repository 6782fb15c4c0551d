"""Logging setup for the CLI."""

import logging
import sys

# Libraries whose INFO/DEBUG output is noise unless we are debugging
NOISY_LOGGERS = ("urllib3",)


def setup_logger(log_level: str = "INFO", name: str = "pr_graph") -> logging.Logger:
    """
    Configure root logging for a CLI run and return the application logger.

    Every module logs through ``logging.getLogger(__name__)`` and propagates
    to the stdout handler installed here. Calling it again (e.g. once the
    configured LOG_LEVEL is known) replaces the previous setup.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO
        name: Logger name (default: pr_graph)

    Returns:
        logging.Logger: Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stdout,
        force=True,
    )

    # Connection pool chatter only shows up with DEBUG
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(
            logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
        )

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    return logger
