"""
Logging setup for processes embedding the auth module.

Modules log through ``logging.getLogger(__name__)``; this only configures
the root logger, once per process.
"""

import logging
from typing import Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Calling it again only changes the level; handlers installed by other
    code (e.g. a test runner) are left alone.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL setting.
    """
    global _handler

    level_name = (level or get_settings().log_level).upper()
    root = logging.getLogger()
    root.setLevel(level_name)

    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)

    logging.getLogger(__name__).debug(f"Logging configured at {level_name}")
