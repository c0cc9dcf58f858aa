"""
UI/view constants centralized for reuse across view modules.

Only magic numbers and visible strings live here; decision thresholds come
from `core.services.gesture` and may be overridden by settings.
"""

from __future__ import annotations

WINDOW_TITLE: str = "Swipe Files"
WINDOW_WIDTH_PX: int = 700
WINDOW_HEIGHT_PX: int = 820

# Card geometry
CARD_HEIGHT_PX: int = 580
CARD_MARGIN_PX: int = 24
PREVIEW_MAX_HEIGHT_PX: int = 520
TEXT_PREVIEW_MAX_HEIGHT_PX: int = 140

# Fly-out animation after a committed swipe
FLY_OUT_DISTANCE_PX: int = 600
FLY_OUT_DURATION_MS: int = 250
SNAP_BACK_DURATION_MS: int = 200

# Hint colours (RGBA)
DISCARD_HINT_COLOR: tuple[int, int, int, int] = (220, 53, 69, 64)
KEEP_HINT_COLOR: tuple[int, int, int, int] = (40, 167, 69, 64)

# Texts
NO_FILES_TEXT: str = "No files found in this folder"
ALL_DONE_TEXT: str = "All files reviewed"
PICK_FOLDER_TEXT: str = "Select a folder to start reviewing"
NO_PREVIEW_TEXT: str = "(no preview)"
DISCARD_HINT_TEXT: str = "Delete"
KEEP_HINT_TEXT: str = "Keep"

STATUS_TIMEOUT_MS: int = 3000
