"""Swipeable card presenting the entry under review.

Dragging the card horizontally past the commit threshold flies it out and
emits `swiped` with the decision; shorter drags snap back.
"""

from __future__ import annotations

from PySide6.QtCore import QEasingCurve, Qt, QVariantAnimation, Signal
from PySide6.QtWidgets import QFrame, QLabel, QPushButton, QStyle, QVBoxLayout, QWidget

from app.viewmodels.entry_vm import EntryVM
from app.views.constants import (
    CARD_MARGIN_PX,
    DISCARD_HINT_COLOR,
    DISCARD_HINT_TEXT,
    FLY_OUT_DISTANCE_PX,
    FLY_OUT_DURATION_MS,
    KEEP_HINT_COLOR,
    KEEP_HINT_TEXT,
    SNAP_BACK_DURATION_MS,
)
from app.views.preview_pane import PreviewPane
from core.models import Disposition
from core.services.gesture import (
    COMMIT_THRESHOLD_PX,
    HINT_THRESHOLD_PX,
    SwipeDecision,
    drag_hint,
    resolve_drag,
)


def _rgba(color: tuple[int, int, int, int]) -> str:
    return "rgba({}, {}, {}, {})".format(*color)


class SwipeCard(QWidget):
    """Track widget hosting the card; owns the drag offset."""

    swiped = Signal(object)  # Disposition
    openRequested = Signal()

    def __init__(
        self,
        preview: PreviewPane,
        parent: QWidget | None = None,
        commit_threshold: float = COMMIT_THRESHOLD_PX,
        hint_threshold: float = HINT_THRESHOLD_PX,
    ) -> None:
        super().__init__(parent)
        self._commit_threshold = commit_threshold
        self._hint_threshold = hint_threshold
        self._offset = 0.0
        self._drag_start: float | None = None
        self._pending: Disposition | None = None

        self._hint_label = QLabel(self)
        self._hint_label.setAlignment(Qt.AlignVCenter | Qt.AlignRight)

        self._card = QFrame(self)
        self._card.setObjectName("card")
        self._card.setFrameShape(QFrame.Shape.StyledPanel)
        self._card.setAutoFillBackground(True)
        layout = QVBoxLayout(self._card)
        layout.setContentsMargins(CARD_MARGIN_PX, CARD_MARGIN_PX, CARD_MARGIN_PX, CARD_MARGIN_PX)
        layout.setSpacing(12)

        self._icon_label = QLabel()
        self._icon_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._icon_label)

        self._name_label = QLabel()
        self._name_label.setAlignment(Qt.AlignCenter)
        self._name_label.setWordWrap(True)
        font = self._name_label.font()
        font.setPointSizeF(font.pointSizeF() * 1.3)
        self._name_label.setFont(font)
        layout.addWidget(self._name_label)

        self._size_label = QLabel()
        self._size_label.setAlignment(Qt.AlignCenter)
        self._size_label.setEnabled(False)
        layout.addWidget(self._size_label)

        self._preview = preview
        layout.addWidget(self._preview, 1)

        self._open_button = QPushButton("Open in Default App")
        self._open_button.clicked.connect(self.openRequested.emit)
        layout.addWidget(self._open_button, 0, Qt.AlignHCenter)

        self._animation = QVariantAnimation(self)
        self._animation.valueChanged.connect(self._set_offset)
        self._animation.finished.connect(self._on_animation_finished)

        self._update_hint()

    def set_entry(self, entry: EntryVM | None) -> None:
        """Show `entry` on the card, resetting any drag offset."""
        self._animation.stop()
        self._pending = None
        self._drag_start = None
        self._set_offset(0.0)
        if entry is None:
            self._name_label.clear()
            self._size_label.clear()
            self._icon_label.clear()
            self._preview.show_entry(None)
            return
        icon = self.style().standardIcon(getattr(QStyle.StandardPixmap, entry.icon_name))
        self._icon_label.setPixmap(icon.pixmap(48, 48))
        self._name_label.setText(entry.file_name)
        self._name_label.setToolTip(entry.path)
        self._size_label.setText(entry.size_text)
        self._preview.show_entry(entry)

    def swipe(self, disposition: Disposition) -> None:
        """Commit `disposition` as if the card had been dragged off."""
        if self._animation.state() == QVariantAnimation.State.Running:
            return
        decision = (
            SwipeDecision.COMMIT_KEEP
            if disposition is Disposition.KEEP
            else SwipeDecision.COMMIT_DISCARD
        )
        self._commit(decision)

    # Mouse handling
    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        running = self._animation.state() == QVariantAnimation.State.Running
        if event.button() == Qt.LeftButton and not running:
            self._drag_start = event.position().x() - self._offset
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        if self._drag_start is not None:
            self._set_offset(event.position().x() - self._drag_start)
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        if self._drag_start is not None and event.button() == Qt.LeftButton:
            self._drag_start = None
            self._commit(resolve_drag(self._offset, self._commit_threshold))
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._layout_card()

    # Internals
    def _commit(self, decision: SwipeDecision) -> None:
        self._pending = decision.disposition
        if self._pending is None:
            self._animate_to(0.0, SNAP_BACK_DURATION_MS, QEasingCurve.Type.OutBack)
            return
        target = FLY_OUT_DISTANCE_PX
        if self._pending is Disposition.DISCARD:
            target = -target
        self._animate_to(float(target), FLY_OUT_DURATION_MS, QEasingCurve.Type.InQuad)

    def _animate_to(self, target: float, duration_ms: int, curve: QEasingCurve.Type) -> None:
        self._animation.stop()
        self._animation.setStartValue(self._offset)
        self._animation.setEndValue(target)
        self._animation.setDuration(duration_ms)
        self._animation.setEasingCurve(curve)
        self._animation.start()

    def _on_animation_finished(self) -> None:
        disposition, self._pending = self._pending, None
        if disposition is None:
            return
        self._set_offset(0.0)
        self.swiped.emit(disposition)

    def _set_offset(self, value: object) -> None:
        self._offset = float(value)  # type: ignore[arg-type]
        self._update_hint()
        self._layout_card()

    def _update_hint(self) -> None:
        hint = drag_hint(self._offset, self._hint_threshold)
        if hint is Disposition.DISCARD:
            self._hint_label.setText(f"🗑 {DISCARD_HINT_TEXT}  ")
            self._hint_label.setAlignment(Qt.AlignVCenter | Qt.AlignRight)
            self._hint_label.setStyleSheet(
                f"background: {_rgba(DISCARD_HINT_COLOR)}; color: red; font-weight: bold;"
                " border-radius: 16px;"
            )
            self._hint_label.show()
        elif hint is Disposition.KEEP:
            self._hint_label.setText(f"  {KEEP_HINT_TEXT} ✔")
            self._hint_label.setAlignment(Qt.AlignVCenter | Qt.AlignLeft)
            self._hint_label.setStyleSheet(
                f"background: {_rgba(KEEP_HINT_COLOR)}; color: green; font-weight: bold;"
                " border-radius: 16px;"
            )
            self._hint_label.show()
        else:
            self._hint_label.hide()

    def _layout_card(self) -> None:
        r = self.rect()
        margin = CARD_MARGIN_PX
        self._hint_label.setGeometry(r.adjusted(margin, 0, -margin, 0))
        self._card.setGeometry(
            margin + int(self._offset), 0, max(0, r.width() - 2 * margin), r.height()
        )
