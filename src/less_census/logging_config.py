"""
Logging configuration for less-census.

Log records go to stderr through rich so they do not interleave with the
progress bar or with JSON written to stdout. An optional log file gets plain
lines tagged with the execution unit that wrote them, so messages from
concurrent workers can be told apart.
"""

import logging
import threading
from multiprocessing import current_process
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "less_census"

# Thread and process names given to worker units by the coordinator
WORKER_NAME_PREFIX = "less-census-worker-"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s %(unit)-8s %(levelname)-7s %(name)s: %(message)s"


def current_unit() -> str:
    """``worker-N`` inside a worker thread or process, ``main`` elsewhere."""
    for name in (threading.current_thread().name, current_process().name):
        if name.startswith(WORKER_NAME_PREFIX):
            return "worker-" + name[len(WORKER_NAME_PREFIX) :]
    return "main"


class UnitFilter(logging.Filter):
    """Adds ``record.unit`` for ``FILE_FORMAT``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.unit = current_unit()
        return True


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``less_census`` logger.

    May be called more than once; each call replaces the previous handlers.

    Args:
        verbosity: ``quiet`` (errors only), ``normal`` (warnings) or
            ``verbose`` (debug, with source paths and traceback locals)
        log_file: Optional file to append every record to, at the same level

    Returns:
        Configured logger instance for less_census
    """
    level = LEVELS[verbosity]
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.addFilter(UnitFilter())
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under ``less_census``.

    Args:
        name: Module name (e.g., 'less_census.scanning.worker')
              If None, returns the root less_census logger
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
