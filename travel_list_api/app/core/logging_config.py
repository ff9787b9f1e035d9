"""
Logging configuration for the Travel List API.

``setup_logging`` configures the root logger once with a console
handler and, optionally, a file handler.  Two loggers get their own
level on top of the root level:

* ``travel_list_api.access``, written by the request logging
  middleware, so per-request lines can be silenced in production
  without hiding application messages;
* ``pymongo``, whose connection pool and server monitoring messages
  are only useful when debugging and are kept at ``WARNING`` unless
  the root level is ``DEBUG``.
"""

import logging
from pathlib import Path
from typing import Optional

ACCESS_LOGGER = "travel_list_api.access"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: Optional[str], default: int) -> int:
    if not name:
        return default
    return getattr(logging, name.upper(), default)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, access_level: Optional[str] = None) -> None:
    """Configure root, access and driver loggers.

    Parameters
    ----------
    level : str
        Root level name (e.g. ``"DEBUG"``).  Unknown names fall back to
        ``INFO``.
    logfile : Optional[str]
        Path of a file to also log to.  No file handler when empty.
    access_level : Optional[str]
        Level of the access logger; inherits the root level when empty.
    """
    root_level = _level(level, logging.INFO)
    logging.getLogger(ACCESS_LOGGER).setLevel(_level(access_level, logging.NOTSET))
    logging.getLogger("pymongo").setLevel(logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING)

    logger = logging.getLogger()
    if logger.handlers:
        # Already configured, e.g. by uvicorn or by a previous create_app().
        return
    logger.setLevel(root_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
