"""Review queue and disposition action.

The queue holds the not-yet-decided entries in sort order; the front entry is
the one presented to the user. Decisions are applied serially to the front
entry. A discard removes the entry from the visible sequence before the trash
call and puts it back at its sorted position if the call fails.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from loguru import logger

from core.errors import AccessDenied, DispositionFailed
from core.models import Disposition, DispositionResult, EntryState, FileEntry, SortCriterion
from core.services.interfaces import AccessGrant, TrashService
from core.services.sort_service import SortService


class ReviewQueue:
    """Ordered working set of entries awaiting a decision."""

    def __init__(
        self,
        trash: TrashService,
        sorter: SortService | None = None,
        criterion: SortCriterion = SortCriterion.NAME,
    ) -> None:
        self._trash = trash
        self._sorter = sorter or SortService()
        self._criterion = criterion
        self._entries: list[FileEntry] = []
        self._states: dict[str, EntryState] = {}
        self._in_flight: FileEntry | None = None

    # Read access
    @property
    def criterion(self) -> SortCriterion:
        return self._criterion

    @property
    def head(self) -> FileEntry | None:
        """Front entry (the one being reviewed), or None when empty."""
        return self._entries[0] if self._entries else None

    @property
    def entries(self) -> list[FileEntry]:
        """Snapshot of the queue in display order."""
        return list(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def in_flight(self) -> FileEntry | None:
        """Entry whose discard is currently being applied."""
        return self._in_flight

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(list(self._entries))

    def __contains__(self, entry: object) -> bool:
        return isinstance(entry, FileEntry) and any(
            e.identity == entry.identity for e in self._entries
        )

    def state_of(self, identity: str) -> EntryState | None:
        """Lifecycle state of the entry with `identity`, None if never queued."""
        return self._states.get(identity)

    # Mutation
    def replace(self, entries: Iterable[FileEntry], criterion: SortCriterion | None = None) -> None:
        """Replace the whole queue with a fresh listing."""
        self._ensure_idle()
        if criterion is not None:
            self._criterion = criterion
        self._entries = self._sorter.sort(entries, self._criterion)
        self._states = {e.identity: EntryState.QUEUED for e in self._entries}

    def clear(self) -> None:
        self._ensure_idle()
        self._entries = []
        self._states = {}

    def resort(self, criterion: SortCriterion) -> None:
        """Re-order the queue under `criterion`."""
        self._ensure_idle()
        self._criterion = criterion
        self._entries = self._sorter.sort(self._entries, criterion)

    def decide(
        self, disposition: Disposition, grant: AccessGrant | None = None
    ) -> DispositionResult | None:
        """Apply `disposition` to the front entry.

        Keep only advances the queue. Discard advances the queue, then moves
        the file to the trash under `grant`; on failure the entry is put back
        at its sorted position and the result carries the error message.

        Returns:
            The result, or None when the queue is empty.
        """
        self._ensure_idle()
        entry = self.head
        if entry is None:
            return None

        self._entries.pop(0)
        if disposition is Disposition.KEEP:
            self._states[entry.identity] = EntryState.REMOVED
            logger.info("Kept: {}", entry.display_name)
            return DispositionResult(entry, disposition, EntryState.REMOVED)

        self._states[entry.identity] = EntryState.DISPOSING
        self._in_flight = entry
        try:
            self._trash_entry(entry, grant)
        except (AccessDenied, DispositionFailed) as ex:
            logger.error("Discard failed for {}: {}", entry.identity, ex.message)
            self._reinsert(entry)
            return DispositionResult(
                entry, disposition, EntryState.REINSERTED_QUEUED, error_message=ex.message
            )
        finally:
            self._in_flight = None

        self._states[entry.identity] = EntryState.REMOVED
        logger.info("Moved to trash: {}", entry.display_name)
        return DispositionResult(entry, disposition, EntryState.REMOVED)

    def keep(self) -> DispositionResult | None:
        return self.decide(Disposition.KEEP)

    def discard(self, grant: AccessGrant | None = None) -> DispositionResult | None:
        return self.decide(Disposition.DISCARD, grant)

    # Internals
    def _trash_entry(self, entry: FileEntry, grant: AccessGrant | None) -> None:
        if grant is None:
            self._trash.move_to_trash(str(entry.location))
            return
        with grant.access():
            self._trash.move_to_trash(str(entry.location))

    def _reinsert(self, entry: FileEntry) -> None:
        index = self._sorter.insertion_index(self._entries, entry, self._criterion)
        self._entries.insert(index, entry)
        self._states[entry.identity] = EntryState.REINSERTED_QUEUED

    def _ensure_idle(self) -> None:
        if self._in_flight is not None:
            raise RuntimeError(
                f"Disposition of {self._in_flight.identity} is still in progress"
            )
