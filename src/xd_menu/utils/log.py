"""Logging setup for xd-menu.

Every module asks for a child of the ``xd_menu`` logger through
:func:`get_logger`.  :func:`setup_logging` is called once by the CLI;
library use without it stays silent apart from Python's last-resort
handler for warnings and errors.
"""

from __future__ import annotations

import logging
import os
import sys

ROOT_LOGGER: str = "xd_menu"
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LEVEL_ENV_VAR: str = "XD_LOG_LEVEL"
DEFAULT_LEVEL: str = "WARNING"


def resolve_level(level: str | None = None) -> int:
    """Map a level name (or ``$XD_LOG_LEVEL``) to a :mod:`logging` level."""
    name = (level or os.getenv(LEVEL_ENV_VAR) or DEFAULT_LEVEL).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        return logging.WARNING
    return resolved


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(resolve_level(level))

    # Avoid duplicate console handlers on repeated calls
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it for *name*."""
    base = logging.getLogger(ROOT_LOGGER)
    if not name or name == ROOT_LOGGER:
        return base
    if name.startswith(ROOT_LOGGER + "."):
        name = name[len(ROOT_LOGGER) + 1:]
    return base.getChild(name)
