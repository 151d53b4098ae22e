"""Logging setup shared by the GUI entry point and the settings view-model.

Environment overrides always win over the GUI preference:

- ``HOSTLINK_LOG_LEVEL``: level name (``DEBUG``, ``warning``) or number.
- ``HOSTLINK_DEBUG`` / ``HOSTLINK_DEBUG_LOGGING``: truthy value forces DEBUG.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "HOSTLINK_LOG_LEVEL"
DEBUG_ENVS = ("HOSTLINK_DEBUG", "HOSTLINK_DEBUG_LOGGING")

# Chatty third-party loggers kept at WARNING unless we run at DEBUG.
_NOISY_LOGGERS = ("urllib3", "requests")
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_level(value: Optional[str]) -> Optional[int]:
    """Return the numeric level for ``value`` or ``None`` if it is not one."""
    text = (value or "").strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def env_level() -> Optional[int]:
    """Level forced by the environment, if any."""
    explicit = parse_level(os.getenv(LEVEL_ENV))
    if explicit is not None:
        return explicit
    for name in DEBUG_ENVS:
        if (os.getenv(name) or "").strip().lower() in _TRUTHY:
            return logging.DEBUG
    return None


def _set_level(level: int) -> int:
    logging.getLogger().setLevel(level)
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
    return level


def configure_root(default_level: int = logging.INFO) -> int:
    """Install the console handler once and apply the effective level.

    Returns:
        int: Level in force after configuration.
    """
    level = env_level()
    if level is None:
        level = default_level
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    return _set_level(level)


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Switch between INFO and DEBUG from the settings toggle."""
    level = env_level()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    return _set_level(level)


def env_debug() -> bool:
    """True if the environment forces DEBUG (the GUI toggle starts checked)."""
    level = env_level()
    return level is not None and level <= logging.DEBUG


__all__ = [
    "DEBUG_ENVS",
    "LEVEL_ENV",
    "apply_gui_preferences",
    "configure_root",
    "env_debug",
    "env_level",
    "parse_level",
]
