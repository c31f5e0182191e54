from __future__ import annotations

import logging
import os
from typing import Optional


_CONFIGURED = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the song pipeline.

    Every bard module calls get_logger at import time, which configures
    logging with the default level before the CLI has parsed --log_level.
    A later call with an explicit level therefore only re-levels the root
    logger instead of being ignored.

    Args:
        level: Optional log level name (e.g., "INFO", "DEBUG"). If omitted,
               reads LOG_LEVEL env or defaults to INFO.
    """
    global _CONFIGURED
    if _CONFIGURED:
        if level:
            logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))
        return

    log_level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # requests to the Inference API go through urllib3, which logs every
    # connection at DEBUG; keep that out of --log_level DEBUG runs
    logging.getLogger("urllib3").setLevel(max(log_level, logging.INFO))

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger (e.g. ``bard.mixer``) with global config ensured."""
    setup_logging()
    return logging.getLogger(name)
