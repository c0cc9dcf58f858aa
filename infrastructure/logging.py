"""Logging initialization utilities using loguru."""

from __future__ import annotations

import os
from pathlib import Path
import sys

from loguru import logger

from infrastructure.launcher import open_directory

APP_DIR_NAME = "SwipeFiles"


def get_log_directory() -> str:
    """Per-user log directory for the current platform."""
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
        return str(Path(base) / APP_DIR_NAME / "logs")
    if sys.platform == "darwin":
        return str(Path.home() / "Library" / "Logs" / APP_DIR_NAME)
    base = os.environ.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return str(Path(base) / "swipe-files" / "logs")


def init_logging(log_dir: str | None = None, level: str = "INFO") -> Path:
    """Initialize rotating file logging under the given directory.

    Returns the directory the log files are written to.
    """
    log_path = Path(os.path.expandvars(log_dir) if log_dir else get_log_directory())
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    if sys.stderr is not None:
        logger.add(sys.stderr, level="WARNING")
    logger.add(
        str(log_path / "app_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
        level=level.upper(),
    )
    return log_path


def open_log_directory(log_dir: str | None = None) -> bool:
    """Open the log directory in the file manager."""
    return open_directory(log_dir or get_log_directory())
