from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "layertools"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED_KEY: tuple[str, str] | None = None
_INSTALLED_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_stdlib_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> logging.Logger:
    """Route the ``layertools`` logger to ``log_path``, or to stderr when unset.

    Stdout is never used so command output stays machine-readable.
    Idempotent per-process: if already configured for the same target and
    level, no-op.
    """
    global _CONFIGURED_KEY, _INSTALLED_HANDLER

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    key = (target, str(level).upper())
    logger = logging.getLogger(LOGGER_NAME)
    if _CONFIGURED_KEY == key and _INSTALLED_HANDLER is not None:
        return logger

    if _INSTALLED_HANDLER is not None:
        logger.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
        _INSTALLED_HANDLER = None

    handler: logging.Handler
    if log_path:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.setLevel(_level_from_name(level))
    logger.addHandler(handler)
    logger.propagate = False

    _INSTALLED_HANDLER = handler
    _CONFIGURED_KEY = key
    return logger


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _CONFIGURED_KEY, _INSTALLED_HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    if _INSTALLED_HANDLER is not None:
        logger.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
    _INSTALLED_HANDLER = None
    _CONFIGURED_KEY = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests", "LOGGER_NAME"]
