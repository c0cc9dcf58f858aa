"""Directory access grants.

A grant is the permission to operate under one user-selected directory. It is
acquired when the directory is selected, re-activated around every batch of
filesystem operations, and released when another directory is selected or the
application exits.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import os
from pathlib import Path

from loguru import logger

from core.errors import AccessDenied


class DirectoryAccessGrant:
    """Scoped access to a single directory.

    Activations are counted so nested `access()` blocks stay balanced. Only
    read and traverse rights are checked; a missing write right surfaces per
    file when the entry is moved to the Trash.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser().resolve()
        self._active = 0
        self._released = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_active(self) -> bool:
        return self._active > 0

    @property
    def is_released(self) -> bool:
        return self._released

    def start_accessing(self) -> bool:
        """Activate the grant; False when the directory cannot be used."""
        if self._released:
            return False
        if not self._path.is_dir() or not os.access(self._path, os.R_OK | os.X_OK):
            logger.warning("Access check failed for {}", self._path)
            return False
        self._active += 1
        return True

    def stop_accessing(self) -> None:
        if self._active > 0:
            self._active -= 1

    @contextmanager
    def access(self) -> Iterator[None]:
        """Keep the grant active for the duration of the block.

        Raises:
            AccessDenied: The grant was released or the directory is unusable.
        """
        if not self.start_accessing():
            raise AccessDenied("Lost access to folder. Please select it again.")
        try:
            yield
        finally:
            self.stop_accessing()

    def release(self) -> None:
        """Release the grant permanently."""
        if self._released:
            return
        self._released = True
        self._active = 0
        logger.debug("Released access grant for {}", self._path)

    def __enter__(self) -> DirectoryAccessGrant:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"DirectoryAccessGrant({str(self._path)!r}, released={self._released})"
