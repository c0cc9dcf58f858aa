"""Core domain models for directory entries and review decisions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

# Sentinel used when a modification time cannot be read
FAR_PAST = datetime.min


@dataclass(frozen=True)
class FileEntry:
    """A single direct child of the reviewed directory."""

    identity: str
    display_name: str
    location: Path
    is_container: bool = False
    size_bytes: int = 0
    modified_at: datetime = FAR_PAST

    @property
    def extension(self) -> str:
        """Lower-cased extension without the leading dot ("" when none)."""
        return self.location.suffix.lower().lstrip(".")


class SortCriterion(Enum):
    """Orders the review queue."""

    NAME = "name"
    OLDEST_FIRST = "oldest_first"
    LARGEST_FIRST = "largest_first"

    @property
    def label(self) -> str:
        return _CRITERION_LABELS[self]

    @classmethod
    def parse(cls, value: object) -> SortCriterion:
        """Return the criterion named by `value`, falling back to NAME."""
        if isinstance(value, SortCriterion):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NAME


_CRITERION_LABELS = {
    SortCriterion.NAME: "Name",
    SortCriterion.OLDEST_FIRST: "Oldest First",
    SortCriterion.LARGEST_FIRST: "Largest First",
}


class PreviewKind(Enum):
    IMAGE = "image"
    VIDEO = "video"
    PDF = "pdf"
    TEXT = "text"
    NONE = "none"


class Disposition(Enum):
    """User decision for the front entry."""

    KEEP = "keep"
    DISCARD = "discard"


class EntryState(Enum):
    QUEUED = "queued"
    DISPOSING = "disposing"
    REMOVED = "removed"
    REINSERTED_QUEUED = "reinserted_queued"


@dataclass
class DispositionResult:
    """Outcome of one decision.

    Attributes:
        entry: The entry the decision applied to.
        disposition: Keep or discard.
        state: Final state (REMOVED or REINSERTED_QUEUED).
        error_message: User-facing failure text, None on success.
    """

    entry: FileEntry
    disposition: Disposition
    state: EntryState
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is EntryState.REMOVED
