"""Loguru sinks for CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from wirecall.config.schema import LoggingConfig

STDERR_FORMAT = "<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>"


def log_file_path(file_name: str) -> Path:
    return Path.home() / ".wirecall" / "logs" / f"{file_name}.log"


def configure_logging(cfg: LoggingConfig, *, verbose: bool = False) -> Path | None:
    """Replace all sinks: stderr at the configured level, plus a rotating file when ``file_name`` is set.

    Returns the log file path, if any.
    """
    level = "DEBUG" if verbose else cfg.level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=STDERR_FORMAT)
    if not cfg.file_name:
        return None

    path = log_file_path(cfg.file_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(path),
        level=level,
        rotation="10 MB",
        retention="14 days",
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    return path
