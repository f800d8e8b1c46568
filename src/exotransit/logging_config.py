"""
Console and file logging for exotransit sessions.

Library modules only create ``logging.getLogger(__name__)`` loggers. A host
application calls ``setup_logging`` once to see frame-loop, asset and
ingestion messages.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route every ``exotransit.*`` logger to stdout and, optionally, a file.

    Calling it again replaces the handlers from the previous call.

    Args:
        level: Threshold for the package logger and its handlers.
        log_file: Path of a session log, truncated on each call.
    """
    logger = logging.getLogger("exotransit")
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Logging to %s", log_file or "stdout")
