"""Reads the head of text files for the preview pane."""

from __future__ import annotations

import codecs
from pathlib import Path

from loguru import logger

from core.services.preview_policy import (
    TEXT_PREVIEW_MAX_CHARS,
    TEXT_PREVIEW_MAX_LINES,
    TRUNCATION_MARKER,
    truncate_text,
)

_CHUNK_BYTES = 64 * 1024
# Far more than the preview can show; the rest is decoded but not kept
_KEEP_CHARS = 64 * 1024


class TextPreviewReader:
    """Loads a truncated UTF-8 preview of a file.

    The whole file is decoded so that invalid UTF-8 anywhere in it makes the
    file unpreviewable, but only its head is held in memory.
    """

    def __init__(
        self,
        max_lines: int = TEXT_PREVIEW_MAX_LINES,
        max_chars: int = TEXT_PREVIEW_MAX_CHARS,
    ) -> None:
        self._max_lines = max_lines
        self._max_chars = max_chars

    def read(self, path: str | Path) -> str | None:
        """Return the preview text, or None if unreadable or not valid UTF-8."""
        p = Path(path)
        keep = max(_KEEP_CHARS, self._max_chars + 1)
        decoder = codecs.getincrementaldecoder("utf-8")()
        head: list[str] = []
        kept = 0
        clipped = False
        try:
            with p.open("rb") as f:
                for chunk in iter(lambda: f.read(_CHUNK_BYTES), b""):
                    text = decoder.decode(chunk)
                    if kept < keep:
                        take = text[: keep - kept]
                        head.append(take)
                        kept += len(take)
                        text = text[len(take) :]
                    if text.strip("\n"):
                        clipped = True
            decoder.decode(b"", final=True)
        except OSError as ex:
            logger.debug("Text preview read failed for {}: {}", p, ex)
            return None
        except UnicodeDecodeError:
            logger.debug("Text preview skipped, not UTF-8: {}", p)
            return None

        preview = truncate_text("".join(head), self._max_lines, self._max_chars)
        if clipped and not preview.endswith(TRUNCATION_MARKER):
            preview += TRUNCATION_MARKER
        return preview
