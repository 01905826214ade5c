"""Logging helpers for command-line drivers.

Library modules obtain their logger with ``logging.getLogger(__name__)`` and
never configure handlers themselves. Drivers call
:func:`setup_default_logging` once at startup.
"""

from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_default_logging(level: int | str = "INFO") -> None:
    """Apply a minimal logging configuration once.

    Does nothing if the root logger already has handlers, so an application
    that configured logging itself is left alone.

    Args:
        level: Level name (``"DEBUG"``, ``"INFO"``, ...) or numeric level.
    """
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), logging.INFO)
    else:
        lvl = int(level)

    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=lvl, format=DEFAULT_FORMAT)


__all__ = ["setup_default_logging", "DEFAULT_FORMAT"]
