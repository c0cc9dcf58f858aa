"""Image loading and caching for the preview pane.

Qt readers handle the common formats; Pillow with the pillow-heif opener
handles HEIC/HEIF and anything Qt cannot decode. Every image is bounded to
`max_side` pixels on its longest side, and files above the size ceiling are
not decoded at all.
"""

from __future__ import annotations

from collections import OrderedDict
import os
from pathlib import Path
from typing import Any

from PIL import Image, ImageOps
from pillow_heif import register_heif_opener
from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QImage, QImageReader
from loguru import logger

from core.services.classifier import MAX_IMAGE_PREVIEW_BYTES
from core.services.preview_policy import IMAGE_MAX_SIDE_PX, fit_within

register_heif_opener()

_PILLOW_FIRST = {".heic", ".heif"}


def _cache_key(path: str, side: int) -> str:
    """Key on path, mtime, size and requested side so edits invalidate entries."""
    try:
        st = os.stat(path)
        return f"{path}|{st.st_mtime_ns}|{st.st_size}|{side}"
    except OSError:
        return f"{path}|0|0|{side}"


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, QImage] = OrderedDict()

    def get(self, key: str) -> QImage | None:
        """Return cached QImage for key, moving it to the MRU position."""
        image = self._data.get(key)
        if image is None:
            return None
        self._data.move_to_end(key)
        return image

    def put(self, key: str, image: QImage) -> None:
        """Insert or update `key` with `image`, evicting LRU when over capacity."""
        self._data[key] = image
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)

    def __len__(self) -> int:
        return len(self._data)


class ImageService:
    """Decodes bounded preview images with an in-memory LRU cache."""

    def __init__(self, settings: object | None = None) -> None:
        """Read cache capacity and size limits from `settings` when given."""
        self._mem_cap = 32
        self._max_side = IMAGE_MAX_SIDE_PX
        self._max_bytes = MAX_IMAGE_PREVIEW_BYTES
        if settings is not None:
            self._mem_cap = settings.get_int("image_cache.mem_capacity", self._mem_cap)
            self._max_side = settings.get_int("preview.image_max_side", self._max_side)
            self._max_bytes = settings.get_int("preview.image_max_bytes", self._max_bytes)
        self._mem_cache = _LRUCache(self._mem_cap)

    # Public API
    def get_preview(self, path: str, max_side: int | None = None) -> QImage | None:
        """Return the preview image for `path` bounded by `max_side`.

        Returns None when the file is too large or cannot be decoded.
        """
        side = int(max_side or self._max_side)
        try:
            if os.path.getsize(path) > self._max_bytes:
                logger.info("Image too large to preview: {}", path)
                return None
        except OSError as ex:
            logger.debug("getsize failed for {}: {}", path, ex)
            return None

        key = _cache_key(path, side)
        img = self._mem_cache.get(key)
        if img is not None and not img.isNull():
            return img

        img = self._load_from_source(path, side)
        if img is None or img.isNull():
            return None
        self._mem_cache.put(key, img)
        return img

    # Internal helpers
    def _load_from_source(self, path: str, side: int) -> QImage | None:
        """Try Pillow first for HEIC/HEIF, Qt for everything else, then the other."""
        if Path(path).suffix.lower() in _PILLOW_FIRST:
            return self._load_via_pillow(path, side) or self._load_via_qt(path, side)
        return self._load_via_qt(path, side) or self._load_via_pillow(path, side)

    def _load_via_qt(self, path: str, side: int) -> QImage | None:
        reader = QImageReader(path)
        reader.setAutoTransform(True)
        size = reader.size()
        if size.isValid():
            w, h = fit_within(size.width(), size.height(), side)
            if (w, h) != (size.width(), size.height()):
                reader.setScaledSize(QSize(w, h))
        img = reader.read()
        if img is None or img.isNull():
            logger.debug("QImageReader failed for {}: {}", path, reader.errorString())
            return None
        if max(img.width(), img.height()) > side:
            img = img.scaled(side, side, Qt.KeepAspectRatio, Qt.SmoothTransformation)
        return img

    def _load_via_pillow(self, path: str, side: int) -> QImage | None:
        """Load image with Pillow (HEIF supported through pillow-heif)."""
        try:
            with Image.open(path) as im:
                try:
                    im = ImageOps.exif_transpose(im)
                except (OSError, ValueError, AttributeError):
                    pass
                im.thumbnail(fit_within(im.width, im.height, side), Image.Resampling.LANCZOS)
                return self._pil_to_qimage(im)
        except (OSError, ValueError, Image.DecompressionBombError) as ex:
            logger.debug("Pillow load failed for {}: {}", path, ex)
            return None

    @staticmethod
    def _pil_to_qimage(pil_img: Any) -> QImage | None:
        """Convert a Pillow image to `QImage` and detach from the source buffer."""
        if pil_img.mode not in ("RGBA", "RGB"):
            pil_img = pil_img.convert("RGBA")
        if pil_img.mode == "RGB":
            data = pil_img.tobytes("raw", "RGB")
            qimg = QImage(
                data, pil_img.width, pil_img.height, pil_img.width * 3, QImage.Format_RGB888
            )
        else:
            data = pil_img.tobytes("raw", "RGBA")
            qimg = QImage(
                data, pil_img.width, pil_img.height, pil_img.width * 4, QImage.Format_RGBA8888
            )
        if qimg.isNull():
            return None
        return qimg.copy()
