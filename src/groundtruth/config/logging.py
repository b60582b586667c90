"""Logging setup shared by the CLI and the web server."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "LOG_LEVEL"

# httpx logs every request line at INFO, which drowns out association logs.
_NOISY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(default: int = logging.INFO) -> int:
    """Read ``LOG_LEVEL`` (a level name such as ``DEBUG``), falling back to ``default``."""

    name = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger; ``force=True`` reconfigures an already set-up root."""

    root_level = resolve_log_level() if level is None else level
    logging.basicConfig(
        level=root_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
