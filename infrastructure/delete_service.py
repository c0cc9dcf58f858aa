"""Trash service.

Moves files to the OS trash (recycle bin) via send2trash. Files are never
removed permanently. A file that is already gone counts as trashed, since the
end state matches the intent.
"""

from __future__ import annotations

import os

from loguru import logger
from send2trash import send2trash
from send2trash.exceptions import TrashPermissionError

from core.errors import DispositionFailed, FailureCause


class DeleteService:
    """Sends single files or directories to the trash."""

    def move_to_trash(self, path: str) -> None:
        """Trash `path`.

        Raises:
            DispositionFailed: The trash primitive reported an error.
        """
        normalized_path = os.path.normpath(path)
        name = os.path.basename(normalized_path)

        if not os.path.lexists(normalized_path):
            logger.info("File doesn't exist, nothing to trash: {}", normalized_path)
            return

        try:
            send2trash(normalized_path)
        except FileNotFoundError as ex:
            if not os.path.lexists(normalized_path):
                logger.info("File vanished before trashing: {}", normalized_path)
                return
            raise self._failure(name, normalized_path, FailureCause.FILE_MISSING, ex) from ex
        except (PermissionError, TrashPermissionError) as ex:
            raise self._failure(name, normalized_path, FailureCause.PERMISSION_LOST, ex) from ex
        except OSError as ex:
            raise self._failure(name, normalized_path, FailureCause.IO_ERROR, ex) from ex
        logger.info("Moved to trash: {}", normalized_path)

    @staticmethod
    def _failure(name: str, path: str, cause: FailureCause, ex: Exception) -> DispositionFailed:
        logger.error("Trash error ({}) for {}: {}", cause.value, path, ex)
        reason = getattr(ex, "strerror", None) or str(ex) or type(ex).__name__
        return DispositionFailed(f"Failed to move {name} to Trash: {reason}", cause, path)
