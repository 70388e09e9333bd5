"""Logging setup for finreport.

Library modules only call ``get_logger``; handlers are attached by the
application boundary (the CLI) through ``configure_logging``.
"""

import logging
import sys
import threading
from typing import Any, Optional

__all__ = ["get_logger", "configure_logging", "reset_logging", "LOG_FORMAT"]

_LOGGER_PREFIX = "finreport"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False
_lock = threading.Lock()


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the finreport namespace.

    Accepts either a bare name ("balance") or a module path
    ("finreport.domain.balance").
    """
    if name == _LOGGER_PREFIX or name.startswith(f"{_LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def parse_level(level: int | str) -> int:
    """Resolve a level name such as "debug" to its numeric value."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: '{level}'")
    return resolved


def configure_logging(
    *,
    level: int | str = logging.WARNING,
    stream: Any = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Configure the finreport logger hierarchy (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(parse_level(level))
    root_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
