"""Best-effort filesystem metadata helpers.

These helpers never raise on a per-file failure; callers receive the
documented sentinel instead (0 bytes, `FAR_PAST`).
"""

from __future__ import annotations

from datetime import datetime
import os
import stat as stat_module
import sys

from loguru import logger

from core.models import FAR_PAST

# Windows FILE_ATTRIBUTE_HIDDEN
_FILE_ATTRIBUTE_HIDDEN = getattr(stat_module, "FILE_ATTRIBUTE_HIDDEN", 0x2)


def is_hidden(dir_entry: os.DirEntry) -> bool:
    """True for dot-files and, on Windows, entries with the hidden attribute."""
    if dir_entry.name.startswith("."):
        return True
    if sys.platform == "win32":
        try:
            attrs = getattr(dir_entry.stat(follow_symlinks=False), "st_file_attributes", 0)
            return bool(attrs & _FILE_ATTRIBUTE_HIDDEN)
        except OSError as ex:
            logger.debug("Hidden attribute read failed for {}: {}", dir_entry.path, ex)
    return False


def is_directory(dir_entry: os.DirEntry) -> bool:
    """Directory check following symlinks; False when unreadable."""
    try:
        return dir_entry.is_dir()
    except OSError as ex:
        logger.debug("is_dir failed for {}: {}", dir_entry.path, ex)
        return False


def get_size_bytes(dir_entry: os.DirEntry, is_dir: bool) -> int:
    """File size in bytes; 0 for directories or when unavailable."""
    if is_dir:
        return 0
    try:
        return max(0, int(dir_entry.stat().st_size))
    except (OSError, ValueError) as ex:
        logger.debug("stat size failed for {}: {}", dir_entry.path, ex)
        return 0


def get_modified_datetime(dir_entry: os.DirEntry) -> datetime:
    """Modification time; `FAR_PAST` when unavailable."""
    try:
        return datetime.fromtimestamp(dir_entry.stat().st_mtime)
    except (OSError, OverflowError, ValueError) as ex:
        logger.debug("stat mtime failed for {}: {}", dir_entry.path, ex)
        return FAR_PAST
