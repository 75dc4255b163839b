"""Central logging utilities for the Claim Registry service.

This module enforces a consistent logging configuration across the
code-base and provides a helper for retrieving module-scoped loggers.

Key Features
------------
1. configure_logging(): idempotent initialization of the root logger.
2. get_logger(name): typed helper that always returns a configured logger.
3. reset_logging(): forget the configured state (tests only).
"""

from __future__ import annotations

import logging
from typing import Final

from beartype import beartype

__all__: Final = [
    "configure_logging",
    "get_logger",
    "reset_logging",
]

_DEFAULT_LOG_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_ROOT_LOGGER_NAME: Final = "claim_registry"
_is_configured: bool = False


@beartype
def configure_logging(
    *,
    level: int | str = logging.INFO,
    fmt: str = _DEFAULT_LOG_FORMAT,
    force: bool = False,
) -> None:
    """Configure the root logger exactly once.

    Calling this function multiple times is safe – configuration will only
    be applied on the first invocation unless ``force`` is set, which the
    application factory uses to apply the configured level. ``level``
    accepts either a numeric level or its name (``"DEBUG"``, ``"INFO"``...).
    """
    global _is_configured
    if _is_configured and not force:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=fmt, force=force)
    logging.getLogger(_ROOT_LOGGER_NAME).setLevel(level)
    _is_configured = True


@beartype
def get_logger(name: str | None = None, *, level: int | None = None) -> logging.Logger:
    """Return a module-scoped logger that is guaranteed to be configured."""
    configure_logging()
    logger = logging.getLogger(name or _ROOT_LOGGER_NAME)
    if level is not None:
        logger.setLevel(level)
    return logger


@beartype
def reset_logging() -> None:
    """Allow ``configure_logging`` to run again (for testing)."""
    global _is_configured
    _is_configured = False
