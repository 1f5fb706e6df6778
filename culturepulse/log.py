"""Project logger shared by the server, collectors and the realtime agent."""

import logging
import sys
from datetime import datetime

from .config import LOGS_DIR

_logger = None

# Collectors run on worker threads and the agent on its own thread.
FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(threadName)s] %(message)s"


def get_logger() -> logging.Logger:
    """The ``culturepulse`` logger, created on first use.

    Console output goes to stderr so ``collect --json`` keeps stdout clean;
    a daily DEBUG file lands in the data directory's ``logs/``.
    """
    global _logger
    if _logger is not None:
        return _logger

    _logger = logging.getLogger("culturepulse")
    _logger.setLevel(logging.DEBUG)
    # uvicorn configures the root logger under `serve`
    _logger.propagate = False

    if _logger.handlers:
        return _logger

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("  %(message)s"))
    _logger.addHandler(console)

    try:
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            LOGS_DIR / f"culturepulse_{datetime.now():%Y%m%d}.log", encoding="utf-8"
        )
    except OSError as e:
        _logger.warning("File logging disabled: %s", e)
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%H:%M:%S"))
        _logger.addHandler(file_handler)

    return _logger


def set_verbose(verbose: bool = True):
    """Console at DEBUG for ``--verbose``; the file handler is always DEBUG."""
    for handler in get_logger().handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(logging.DEBUG if verbose else logging.INFO)


def log(msg: str):
    get_logger().info(msg)
