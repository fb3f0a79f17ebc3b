# refloom/log_config.py
"""Logging for the refloom library using Loguru.

Every module logs through the shared Loguru ``logger`` re-exported here.
Library output is disabled on import so that compiling routes or decoding
responses stays silent inside applications that never asked for it; call
`configure_logging` to turn it on and route it to a sink.
"""

import sys

from loguru import logger

__all__ = ["LIBRARY", "configure_logging", "disable_logging", "logger"]

LIBRARY = "refloom"

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

logger.disable(LIBRARY)


def configure_logging(level: str = "INFO", sink=sys.stderr):
    """
    Enables refloom log output and sends it to a single sink.

    Existing handlers are removed, so this is meant for applications and
    scripts that let refloom own the Loguru setup. Applications with their own
    handlers only need ``logger.enable("refloom")``.

    Args:
        level: The minimum logging level (e.g., "DEBUG", "INFO", "WARNING").
        sink: The output sink (e.g., sys.stderr, "file.log").
    """
    logger.remove()
    logger.add(
        sink,
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=sink is sys.stderr,
        backtrace=True,
        diagnose=True,
    )
    logger.enable(LIBRARY)
    logger.debug(f"refloom logging enabled at level={level.upper()}")


def disable_logging():
    """Silence refloom again without touching the application's handlers."""
    logger.disable(LIBRARY)
