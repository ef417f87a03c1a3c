from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _has_console_handler(logger: logging.Logger) -> bool:
    return any(
        type(h) is logging.StreamHandler
        and h.formatter is not None
        and h.formatter._fmt == LOG_FORMAT
        for h in logger.handlers
    )


def configure_logging(level: str | int = "INFO") -> None:
    """Install a single stream handler on the ``orderdesk`` logger."""
    logger = logging.getLogger("orderdesk")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not _has_console_handler(logger):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
