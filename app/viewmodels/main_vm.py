"""ViewModel holding the review session state.

All state the window renders lives here: the selected directory and its
access grant, the review queue, the active sort criterion, and the last error
message. Nothing is persisted.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from loguru import logger

from app.viewmodels.entry_vm import EntryVM
from core.errors import AccessDenied, ListingFailed, OpenFailed
from core.models import Disposition, DispositionResult, SortCriterion
from core.services.interfaces import AccessGrant, EntrySource, TrashService
from core.services.review_queue import ReviewQueue
from core.services.sort_service import SortService
from infrastructure.access import DirectoryAccessGrant
from infrastructure.launcher import open_in_default_app


class MainVM:
    """Main application view-model.

    Mediates between the directory repository, the trash service and the
    review queue shown by the window.
    """

    def __init__(
        self,
        repo: EntrySource,
        trash: TrashService,
        sorter: SortService | None = None,
        default_sort: SortCriterion = SortCriterion.NAME,
        grant_factory: Callable[[Path], AccessGrant] | None = None,
        opener: Callable[[Path, AccessGrant | None], None] | None = None,
        max_image_bytes: int | None = None,
    ) -> None:
        """Create a MainVM.

        Args:
            repo: Source with `list_entries(directory, grant)`.
            trash: Service with `move_to_trash(path)`.
            sorter: Sorting service (defaults to `SortService`).
            default_sort: Criterion used until the user picks another.
            grant_factory: Builds the access grant for a selected directory.
            opener: Opens a file in its default application.
            max_image_bytes: Image preview size ceiling passed to `EntryVM`.
        """
        self._repo = repo
        self._sorter = sorter or SortService()
        self._grant_factory = grant_factory or DirectoryAccessGrant
        self._opener = opener or open_in_default_app
        self._max_image_bytes = max_image_bytes
        self.queue = ReviewQueue(trash, self._sorter, default_sort)
        self.selected_directory: Path | None = None
        self.grant: AccessGrant | None = None
        self.error_message: str | None = None

    # State
    @property
    def sort_criterion(self) -> SortCriterion:
        return self.queue.criterion

    @property
    def current(self) -> EntryVM | None:
        """Front entry wrapped for display, None when nothing is left."""
        head = self.queue.head
        if head is None:
            return None
        if self._max_image_bytes is None:
            return EntryVM(head)
        return EntryVM(head, max_image_bytes=self._max_image_bytes)

    @property
    def remaining(self) -> int:
        return len(self.queue)

    @property
    def is_finished(self) -> bool:
        """True when a folder is loaded and every entry has been decided."""
        loaded = self.selected_directory is not None
        return loaded and self.queue.is_empty and not self.error_message

    # Directory selection
    def select_directory(self, path: str | Path) -> bool:
        """Switch to `path`, releasing the previous grant, and load its entries."""
        self._release_grant()
        self.queue.clear()
        self.error_message = None
        directory = Path(path)
        grant = self._grant_factory(directory)
        try:
            with grant.access():
                pass
        except AccessDenied:
            grant.release()
            self.selected_directory = None
            self.error_message = "Could not access selected folder"
            logger.warning("Could not access selected folder: {}", directory)
            return False
        self.grant = grant
        self.selected_directory = directory
        logger.info("Selected folder: {}", directory)
        return self.reload()

    def reload(self) -> bool:
        """Re-list the selected directory, replacing the queue."""
        if self.selected_directory is None or self.grant is None:
            self.error_message = "No directory selected"
            return False
        self.queue.clear()
        self.error_message = None
        try:
            entries = self._repo.list_entries(self.selected_directory, self.grant)
        except AccessDenied:
            self.error_message = "Could not access folder"
            logger.warning("Could not access folder: {}", self.selected_directory)
            return False
        except ListingFailed as ex:
            self.error_message = ex.message
            return False
        self.queue.replace(entries)
        return True

    def set_sort_criterion(self, criterion: SortCriterion) -> None:
        """Re-order the queue under `criterion`."""
        if criterion is self.queue.criterion:
            return
        self.queue.resort(criterion)
        logger.info("Sort criterion: {}", criterion.value)

    # Decisions
    def decide(self, disposition: Disposition) -> DispositionResult | None:
        """Apply `disposition` to the current entry and record any failure."""
        if self.queue.is_empty:
            return None
        if disposition is Disposition.DISCARD and self.grant is None:
            self.error_message = "No directory selected"
            return None
        result = self.queue.decide(disposition, self.grant)
        if result is not None:
            self.error_message = result.error_message
        return result

    def keep(self) -> DispositionResult | None:
        return self.decide(Disposition.KEEP)

    def discard(self) -> DispositionResult | None:
        return self.decide(Disposition.DISCARD)

    def open_current(self) -> bool:
        """Open the current entry in its default application."""
        head = self.queue.head
        if head is None:
            return False
        try:
            self._opener(head.location, self.grant)
        except OpenFailed as ex:
            self.error_message = ex.message
            return False
        return True

    def shutdown(self) -> None:
        """Release the access grant; called when the window closes."""
        self._release_grant()

    def _release_grant(self) -> None:
        if self.grant is not None:
            self.grant.release()
            self.grant = None
