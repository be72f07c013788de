"""
app/core/logger.py

Centralised logging configuration.
Every module should obtain its logger via:

    from app.core.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO / DEBUG.
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "multipart", "python_multipart")


def _level() -> int:
    return logging.DEBUG if settings.debug else logging.INFO


def _configure_root_logger() -> None:
    """Attach a single stdout handler to the root logger, once."""
    root = logging.getLogger()
    if root.handlers:
        # Already configured (e.g. by pytest or uvicorn --log-config).
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_level())
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root.setLevel(_level())
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


def get_logger(name: str) -> logging.Logger:
    """Return a named logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
