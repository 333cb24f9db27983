"""Logging configuration for minikanban."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Configure the ``minikanban`` logger.

    Args:
        verbose: 0 logs nothing to the terminal, 1 logs INFO, 2 or more DEBUG
        log_file: Optional file receiving the same records

    Nothing is installed when neither output is requested. Calling it again
    replaces the handlers from the previous call.
    """
    if verbose == 0 and log_file is None:
        return

    level = logging.DEBUG if verbose >= 2 else logging.INFO
    logger = logging.getLogger("minikanban")
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    # The TUI owns the terminal; stderr only on request
    if verbose > 0:
        _attach(logger, logging.StreamHandler(sys.stderr), level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), level)

    started = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("=" * 60)
    logger.info("minikanban starting | %s | level=%s", started, logging.getLevelName(level))
    logger.info("=" * 60)
