"""Lightweight view model wrapper around `FileEntry`."""

from __future__ import annotations

from dataclasses import dataclass

from core.models import FileEntry, PreviewKind
from core.services.classifier import MAX_IMAGE_PREVIEW_BYTES, preview_kind
from core.services.preview_policy import format_file_size


@dataclass
class EntryVM:
    """Expose convenient properties for the swipe card."""

    entry: FileEntry
    max_image_bytes: int = MAX_IMAGE_PREVIEW_BYTES

    @property
    def file_name(self) -> str:
        return self.entry.display_name

    @property
    def path(self) -> str:
        return str(self.entry.location)

    @property
    def size_text(self) -> str:
        return format_file_size(self.entry.size_bytes)

    @property
    def is_folder(self) -> bool:
        return self.entry.is_container

    @property
    def preview_kind(self) -> PreviewKind:
        """Renderer the preview pane should use."""
        return preview_kind(self.entry, self.max_image_bytes)

    @property
    def icon_name(self) -> str:
        """Qt standard icon name for the card header."""
        return "SP_DirIcon" if self.entry.is_container else "SP_FileIcon"
