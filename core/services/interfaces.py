"""Core service interfaces.

The review queue depends on these protocols rather than on concrete OS
adapters so it can be exercised without a real sandbox or trash.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol

from core.models import FileEntry


class AccessGrant(Protocol):
    """Scoped permission to read and write under one user-selected directory."""

    @property
    def path(self) -> Path:
        """Directory the grant covers."""
        ...

    def access(self) -> AbstractContextManager[None]:
        """Activate the grant for a batch of operations.

        Raises:
            AccessDenied: The grant cannot be activated.
        """
        ...

    def release(self) -> None:
        """Drop the grant; later activations fail."""
        ...


class TrashService(Protocol):
    """Moves files to the OS trash."""

    def move_to_trash(self, path: str) -> None:
        """Trash `path`; a path that no longer exists is a no-op.

        Raises:
            DispositionFailed: The file could not be trashed.
        """
        ...


class EntrySource(Protocol):
    """Lists reviewable entries of a directory."""

    def list_entries(self, directory: Path, grant: AccessGrant) -> list[FileEntry]:
        ...
