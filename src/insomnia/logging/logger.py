# src/insomnia/logging/logger.py
from __future__ import annotations

import logging
from pathlib import Path


_LOG_FORMAT = "[%(asctime)s][%(name)s][%(levelname)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d][%H:%M:%S"


def get_logger(name: str = "insomnia", level: int = logging.INFO) -> logging.Logger:
    """
    Get a console logger that doesn't add duplicate handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent double logging if called multiple times
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        sh = logging.StreamHandler()
        sh.setLevel(level)
        sh.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(sh)

    logger.propagate = False
    return logger


def set_package_level(level: int, prefix: str = "insomnia") -> None:
    """Change the level of every already-created package logger and its handlers."""
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name != prefix and not name.startswith(prefix + "."):
            continue
        logger.setLevel(level)
        for h in logger.handlers:
            h.setLevel(level)


def add_file_handler(logger: logging.Logger, log_file: str | Path, level: int = logging.INFO) -> None:
    """
    Add a file handler to an existing logger.
    Safe to call multiple times (won't duplicate).
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Avoid duplicate file handlers for the same path
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and Path(getattr(h, "baseFilename", "")) == log_file.resolve():
            return

    fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(fh)
