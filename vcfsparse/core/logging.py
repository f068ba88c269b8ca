from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER = "vcfsparse"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def level_for_debug(debug: int) -> int:
    if debug <= 0:
        return logging.WARNING
    if debug == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(debug: int = 0, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the package logger on stderr.

    Repeated calls replace the handler instead of stacking a new one.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level_for_debug(debug))
    logger.propagate = False
    return logger
