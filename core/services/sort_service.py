"""Sorting service for review queue entries.

Each criterion is a total order expressed as a single sort key; descending
orders are encoded by negating the key so that one stable ascending sort serves
all criteria and ties keep their incoming (listing) order.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Sequence
from datetime import datetime

from core.models import FileEntry, SortCriterion


class SortService:
    """Provides ordering utilities for `FileEntry` sequences."""

    @staticmethod
    def sort_key(entry: FileEntry, criterion: SortCriterion) -> str | datetime | int:
        """Return the ascending sort key of `entry` under `criterion`."""
        if criterion is SortCriterion.OLDEST_FIRST:
            return entry.modified_at
        if criterion is SortCriterion.LARGEST_FIRST:
            return -int(entry.size_bytes or 0)
        return entry.display_name

    def sort(self, entries: Iterable[FileEntry], criterion: SortCriterion) -> list[FileEntry]:
        """Return a new list of `entries` ordered by `criterion`.

        The sort is stable; the input is not modified.
        """
        return sorted(entries, key=lambda e: self.sort_key(e, criterion))

    def insertion_index(
        self, entries: Sequence[FileEntry], entry: FileEntry, criterion: SortCriterion
    ) -> int:
        """Index where `entry` belongs in the already sorted `entries`.

        Equal keys place the entry after existing ones.
        """
        keys = [self.sort_key(e, criterion) for e in entries]
        return bisect_right(keys, self.sort_key(entry, criterion))
