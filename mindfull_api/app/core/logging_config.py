"""
Logging configuration for the application.

``setup_logging`` configures the root logger once per process: a
console handler, an optional file handler and a single format shared
by both.  Uvicorn is started with ``log_config=None`` (see ``run.py``)
so its ``uvicorn.*`` loggers propagate here instead of installing
their own handlers.
"""

import logging
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> bool:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"``; unknown names fall back to
        ``INFO``.
    logfile : Optional[str]
        Also write records to this file when given.

    Returns
    -------
    bool
        ``False`` when the root logger already had handlers and was
        left untouched (repeated ``create_app`` calls, pytest's
        capture handler).
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return True
