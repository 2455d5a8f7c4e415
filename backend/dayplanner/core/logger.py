"""
Logging setup.
"""

import logging
import sys

from dayplanner.core.config import get_settings

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a named logger with a single stream handler.

    Safe to call repeatedly; handlers are only attached once per name.
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(logging.DEBUG if get_settings().DEBUG else logging.INFO)
    return log


logger = setup_logger("dayplanner")
