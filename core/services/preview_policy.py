"""Pure preview helpers: text truncation, image fit, and size formatting."""

from __future__ import annotations

TEXT_PREVIEW_MAX_LINES = 40
TEXT_PREVIEW_MAX_CHARS = 2000
TRUNCATION_MARKER = "\n\n… (truncated preview)"
IMAGE_MAX_SIDE_PX = 2000

_SIZE_UNITS = ("KB", "MB", "GB", "TB")


def truncate_text(
    content: str,
    max_lines: int = TEXT_PREVIEW_MAX_LINES,
    max_chars: int = TEXT_PREVIEW_MAX_CHARS,
) -> str:
    """Return the head of `content` for display.

    Keeps at most `max_lines` lines and `max_chars` characters and appends
    `TRUNCATION_MARKER` when anything was cut.
    """
    lines = content.split("\n")
    preview = "\n".join(lines[:max_lines])
    if len(preview) > max_chars:
        preview = preview[:max_chars]
    if len(preview) < len(content.rstrip("\n")):
        preview += TRUNCATION_MARKER
    return preview


def fit_within(width: int, height: int, max_side: int = IMAGE_MAX_SIDE_PX) -> tuple[int, int]:
    """Scale (width, height) down so the longest side is at most `max_side`.

    Aspect ratio is preserved and images are never scaled up.
    """
    if width <= 0 or height <= 0 or max_side <= 0:
        return max(width, 0), max(height, 0)
    longest = max(width, height)
    if longest <= max_side:
        return width, height
    scale = max_side / longest
    return max(1, round(width * scale)), max(1, round(height * scale))


def format_file_size(size_bytes: int) -> str:
    """Human-readable size in KB/MB/GB using decimal (1000) units."""
    value = max(0, int(size_bytes or 0)) / 1000.0
    unit = _SIZE_UNITS[0]
    for unit in _SIZE_UNITS:
        if value < 1000 or unit == _SIZE_UNITS[-1]:
            break
        value /= 1000.0
    if value >= 100 or unit == "KB":
        return f"{value:.0f} {unit}"
    return f"{value:.1f} {unit}"


def format_duration(milliseconds: int) -> str:
    """Playback time as MM:SS, or H:MM:SS from one hour on; "--:--" when unknown."""
    if milliseconds < 0:
        return "--:--"
    minutes, seconds = divmod(milliseconds // 1000, 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"
