from __future__ import annotations
import logging

from rich.logging import RichHandler


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Attach a Rich handler to the package logger (idempotent)."""
    logger = logging.getLogger("quicknote")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
