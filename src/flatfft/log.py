# src/flatfft/log.py
"""Logging setup for the command line and scripts."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

__all__ = ["setup_logging"]

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    name: str = "flatfft",
) -> logging.Logger:
    """
    Configure the ``flatfft`` logger (or ``name``).

    Args:
        level: Logging level, int or name ("DEBUG", "info", ...).
        log_file: Optional path; parent directories are created.
        format_string: Custom format string.
        name: Logger name.

    Returns:
        Configured logger
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level {level!r}")
        level = resolved

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Drop handlers from a previous call, keep the library NullHandler
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
