"""Error types raised at the filesystem boundary.

Every error carries a user-facing `message`; view-models surface it verbatim.
"""

from __future__ import annotations

from enum import Enum


class SwipeFilesError(Exception):
    """Base class for recoverable, user-visible failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AccessDenied(SwipeFilesError):
    """The directory access grant is missing, released, or cannot be activated."""


class ListingFailed(SwipeFilesError):
    """Reading the directory contents failed."""


class FailureCause(Enum):
    FILE_MISSING = "file_missing"
    PERMISSION_LOST = "permission_lost"
    IO_ERROR = "io_error"


class DispositionFailed(SwipeFilesError):
    """Moving a file to the trash failed."""

    def __init__(self, message: str, cause: FailureCause, path: str = "") -> None:
        super().__init__(message)
        self.cause = cause
        self.path = path


class OpenFailed(SwipeFilesError):
    """Launching the default application for a file failed."""
