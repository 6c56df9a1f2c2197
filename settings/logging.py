"""Logging configuration - console plus daily rotated files."""

import sys

from loguru import logger

from settings import LOG_DIR


def setup_logging(level: str = "INFO", to_file: bool = True):
    """Configure loguru sinks.

    Console gets ``level`` and above. With ``to_file`` everything from DEBUG
    goes to a daily file, and errors (failed lookups, unhandled exceptions,
    webhook failures) also to a separate file kept longer.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <cyan>{name}</cyan> | <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if to_file:
        LOG_DIR.mkdir(exist_ok=True)
        logger.add(
            LOG_DIR / "nadeshiko_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            rotation="00:00",
            retention="7 days",
            compression="gz",
            enqueue=True,
        )
        logger.add(
            LOG_DIR / "errors_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}",
            level="ERROR",
            rotation="00:00",
            retention="30 days",
            backtrace=False,
            enqueue=True,
        )
        logger.info("Logging to {}", LOG_DIR)

    return logger
