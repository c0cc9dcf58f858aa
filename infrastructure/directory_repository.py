"""Directory listing for the review queue.

Lists the immediate, non-hidden children of a directory with best-effort
metadata. Nothing is recursed into.
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from core.errors import ListingFailed
from core.models import FileEntry
from core.services.interfaces import AccessGrant
from infrastructure.utils import get_modified_datetime, get_size_bytes, is_directory, is_hidden


class DirectoryRepository:
    """Reads `FileEntry` rows from a directory on disk."""

    def list_entries(self, directory: str | Path, grant: AccessGrant) -> list[FileEntry]:
        """Return one entry per non-hidden direct child, in listing order.

        Raises:
            AccessDenied: `grant` cannot be activated.
            ListingFailed: The directory itself cannot be read.
        """
        root = Path(directory)
        with grant.access():
            try:
                entries = self._scan(root)
            except OSError as ex:
                logger.error("Listing {} failed: {}", root, ex)
                reason = ex.strerror or str(ex)
                raise ListingFailed(f"Error loading files: {reason}") from ex
        logger.info("Loaded {} entries from {}", len(entries), root)
        return entries

    def _scan(self, root: Path) -> list[FileEntry]:
        entries: list[FileEntry] = []
        with os.scandir(root) as it:
            for dir_entry in it:
                if is_hidden(dir_entry):
                    continue
                is_dir = is_directory(dir_entry)
                path = Path(os.path.abspath(dir_entry.path))
                entries.append(
                    FileEntry(
                        identity=str(path),
                        display_name=dir_entry.name,
                        location=path,
                        is_container=is_dir,
                        size_bytes=get_size_bytes(dir_entry, is_dir),
                        modified_at=get_modified_datetime(dir_entry),
                    )
                )
        return entries
