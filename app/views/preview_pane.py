from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtGui import QFontDatabase, QPixmap
from PySide6.QtPdf import QPdfDocument
from PySide6.QtPdfWidgets import QPdfView
from PySide6.QtWidgets import QLabel, QPlainTextEdit, QStackedWidget, QVBoxLayout, QWidget
from loguru import logger

from app.viewmodels.entry_vm import EntryVM
from app.views.constants import NO_PREVIEW_TEXT, PREVIEW_MAX_HEIGHT_PX, TEXT_PREVIEW_MAX_HEIGHT_PX
from app.views.image_tasks import ImageTaskRunner
from app.views.widgets.video_player import VideoPlayerWidget
from core.models import PreviewKind
from infrastructure.text_preview import TextPreviewReader


class PreviewPane(QWidget):
    """Shows the preview of the current entry: image, PDF, text or video."""

    def __init__(
        self,
        parent: QWidget | None,
        task_runner: ImageTaskRunner,
        text_reader: TextPreviewReader | None = None,
        image_side: int = 0,
    ) -> None:
        super().__init__(parent)
        self._runner = task_runner
        self._text_reader = text_reader or TextPreviewReader()
        self._image_side = image_side

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        self._stack = QStackedWidget(self)
        root.addWidget(self._stack)

        self._placeholder = QLabel(NO_PREVIEW_TEXT)
        self._placeholder.setAlignment(Qt.AlignCenter)
        self._stack.addWidget(self._placeholder)

        self._image_label = QLabel()
        self._image_label.setAlignment(Qt.AlignCenter)
        self._image_label.setMinimumHeight(200)
        self._stack.addWidget(self._image_label)

        self._pdf_document = QPdfDocument(self)
        self._pdf_view = QPdfView(self)
        self._pdf_view.setDocument(self._pdf_document)
        self._pdf_view.setPageMode(QPdfView.PageMode.SinglePage)
        self._pdf_view.setZoomMode(QPdfView.ZoomMode.FitInView)
        self._stack.addWidget(self._pdf_view)

        self._text_view = QPlainTextEdit()
        self._text_view.setReadOnly(True)
        self._text_view.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        self._text_view.setMaximumHeight(TEXT_PREVIEW_MAX_HEIGHT_PX)
        self._stack.addWidget(self._text_view)

        self._video_host = QWidget()
        self._video_layout = QVBoxLayout(self._video_host)
        self._video_layout.setContentsMargins(0, 0, 0, 0)
        self._stack.addWidget(self._video_host)

        self.setMaximumHeight(PREVIEW_MAX_HEIGHT_PX)

        # state
        self._current_token: str | None = None
        self._pixmap: QPixmap | None = None
        self._video_player: VideoPlayerWidget | None = None

    # Public API
    def show_entry(self, entry: EntryVM | None) -> None:
        """Render the preview for `entry`; None clears the pane."""
        self.clear()
        if entry is None:
            return
        kind = entry.preview_kind
        if kind is PreviewKind.IMAGE:
            self._image_label.setText("Loading…")
            self._stack.setCurrentWidget(self._image_label)
            self._current_token = self._runner.request_preview(entry.path, self._image_side)
        elif kind is PreviewKind.PDF:
            self._show_pdf(entry.path)
        elif kind is PreviewKind.TEXT:
            self._show_text(entry.path)
        elif kind is PreviewKind.VIDEO:
            self._show_video(entry.path)

    def clear(self) -> None:
        self._current_token = None
        self._pixmap = None
        self._image_label.clear()
        self._text_view.clear()
        self._pdf_document.close()
        if self._video_player is not None:
            self._video_layout.removeWidget(self._video_player)
            self._video_player.cleanup()
            self._video_player.deleteLater()
            self._video_player = None
        self._stack.setCurrentWidget(self._placeholder)

    def on_image_loaded(self, token: str, path: str, image: Any) -> None:
        """Slot for `imageLoaded`; results for stale tokens are dropped."""
        if token != self._current_token:
            return
        if image is None:
            logger.debug("No preview image for {}", path)
            self._stack.setCurrentWidget(self._placeholder)
            return
        pm = QPixmap.fromImage(image)
        if pm.isNull():
            self._stack.setCurrentWidget(self._placeholder)
            return
        self._pixmap = pm
        self._apply_pixmap_fit()

    # Internals
    def _show_pdf(self, path: str) -> None:
        self._pdf_document.load(path)
        if self._pdf_document.status() != QPdfDocument.Status.Ready:
            logger.debug("PDF preview failed for {}: {}", path, self._pdf_document.status())
            return
        self._stack.setCurrentWidget(self._pdf_view)

    def _show_text(self, path: str) -> None:
        text = self._text_reader.read(path)
        if text is None:
            return
        self._text_view.setPlainText(text)
        self._stack.setCurrentWidget(self._text_view)

    def _show_video(self, path: str) -> None:
        self._video_player = VideoPlayerWidget(path, self._video_host)
        self._video_layout.addWidget(self._video_player)
        self._stack.setCurrentWidget(self._video_host)
        self._video_player.play()

    def _apply_pixmap_fit(self) -> None:
        if self._pixmap is None:
            return
        target = self._stack.size()
        scaled = self._pixmap.scaled(
            max(1, target.width()),
            max(1, min(target.height(), PREVIEW_MAX_HEIGHT_PX)),
            Qt.KeepAspectRatio,
            Qt.SmoothTransformation,
        )
        self._image_label.setPixmap(scaled)
        self._stack.setCurrentWidget(self._image_label)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._apply_pixmap_fit()
