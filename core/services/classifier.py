"""Maps file extensions to the preview renderer used for them."""

from __future__ import annotations

from pathlib import Path

from core.models import FileEntry, PreviewKind

IMAGE_EXTENSIONS = frozenset(
    {"png", "jpg", "jpeg", "gif", "heic", "heif", "tiff", "tif", "bmp", "webp"}
)
VIDEO_EXTENSIONS = frozenset(
    {"mp4", "mov", "avi", "mkv", "m4v", "webm", "flv", "wmv", "mpg", "mpeg", "3gp"}
)
PDF_EXTENSIONS = frozenset({"pdf"})
TEXT_EXTENSIONS = frozenset(
    {
        "txt", "md", "json", "csv", "log", "xml", "html", "htm", "yaml", "yml",
        "toml", "ini", "cfg", "swift", "py", "js", "ts", "css", "sh", "c", "h",
        "cpp", "java", "go", "rs", "rb",
    }
)  # fmt: skip

# Images above this size are not decoded for preview
MAX_IMAGE_PREVIEW_BYTES = 50 * 1024 * 1024

_KIND_BY_EXTENSION: dict[str, PreviewKind] = {
    ext: kind
    for exts, kind in (
        (IMAGE_EXTENSIONS, PreviewKind.IMAGE),
        (VIDEO_EXTENSIONS, PreviewKind.VIDEO),
        (PDF_EXTENSIONS, PreviewKind.PDF),
        (TEXT_EXTENSIONS, PreviewKind.TEXT),
    )
    for ext in exts
}


def classify_extension(ext: str) -> PreviewKind:
    """Classify a file extension (case-insensitive, leading dot optional)."""
    return _KIND_BY_EXTENSION.get(ext.strip().lower().lstrip("."), PreviewKind.NONE)


def classify_name(name: str) -> PreviewKind:
    """Classify a file name or path by its extension."""
    return classify_extension(Path(name).suffix)


def classify_entry(entry: FileEntry) -> PreviewKind:
    """Classify an entry; directories never get a preview."""
    if entry.is_container:
        return PreviewKind.NONE
    return classify_extension(entry.extension)


def preview_kind(entry: FileEntry, max_image_bytes: int = MAX_IMAGE_PREVIEW_BYTES) -> PreviewKind:
    """Return the renderer to use for `entry`.

    Images larger than `max_image_bytes` are treated as unpreviewable to bound
    memory use.
    """
    kind = classify_entry(entry)
    if kind is PreviewKind.IMAGE and entry.size_bytes > max_image_bytes:
        return PreviewKind.NONE
    return kind
