"""Main window: folder selection, sort choice and the swipe card."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.main_vm import MainVM
from app.views.components.menu_controller import MenuController
from app.views.constants import (
    ALL_DONE_TEXT,
    CARD_HEIGHT_PX,
    NO_FILES_TEXT,
    PICK_FOLDER_TEXT,
    STATUS_TIMEOUT_MS,
    WINDOW_HEIGHT_PX,
    WINDOW_TITLE,
    WINDOW_WIDTH_PX,
)
from app.views.image_tasks import ImageTaskRunner
from app.views.preview_pane import PreviewPane
from app.views.widgets.swipe_card import SwipeCard
from core.models import Disposition, SortCriterion
from core.services.gesture import COMMIT_THRESHOLD_PX, HINT_THRESHOLD_PX
from infrastructure.logging import open_log_directory
from infrastructure.text_preview import TextPreviewReader


class MainWindow(QMainWindow):
    """Single-card review window."""

    # Emitted from ImageTaskRunner worker threads
    imageLoaded = Signal(str, str, object)  # token, path, QImage | None

    def __init__(
        self,
        vm: MainVM,
        image_service: Any | None = None,
        settings: Any | None = None,
    ) -> None:
        """Initialize MainWindow with its view-model and services.

        Args:
            vm: Review session view-model
            image_service: Image service used for background previews
            settings: Settings instance for thresholds and preview limits
        """
        super().__init__()
        self._vm = vm
        self._img = image_service
        self._settings = settings
        self._reviewed_any = False

        self._commit_threshold = COMMIT_THRESHOLD_PX
        self._hint_threshold = HINT_THRESHOLD_PX
        text_reader = TextPreviewReader()
        if settings is not None:
            self._commit_threshold = settings.get_float(
                "swipe.commit_threshold", COMMIT_THRESHOLD_PX
            )
            self._hint_threshold = settings.get_float("swipe.hint_threshold", HINT_THRESHOLD_PX)
            text_reader = TextPreviewReader(
                max_lines=settings.get_int("preview.text_max_lines", 40),
                max_chars=settings.get_int("preview.text_max_chars", 2000),
            )

        self.menu_controller = MenuController(self)
        self._runner = ImageTaskRunner(service=self._img, receiver=self)
        self._preview = PreviewPane(None, self._runner, text_reader=text_reader)

        self._setup_ui()
        self._connect_signals()
        self.refresh()

    def _setup_ui(self) -> None:
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(WINDOW_WIDTH_PX, WINDOW_HEIGHT_PX)

        central = QWidget(self)
        root = QVBoxLayout(central)
        root.setSpacing(16)

        title = QLabel(WINDOW_TITLE)
        font = title.font()
        font.setPointSizeF(font.pointSizeF() * 2)
        title.setFont(font)
        title.setAlignment(Qt.AlignCenter)
        root.addWidget(title)

        controls = QHBoxLayout()
        controls.addStretch()
        self._select_button = QPushButton("Select Folder")
        self._select_button.setDefault(True)
        controls.addWidget(self._select_button)
        controls.addWidget(QLabel("Sort:"))
        self._sort_combo = QComboBox()
        for criterion in SortCriterion:
            self._sort_combo.addItem(criterion.label, criterion)
        controls.addWidget(self._sort_combo)
        controls.addStretch()
        root.addLayout(controls)

        self._folder_label = QLabel()
        self._folder_label.setAlignment(Qt.AlignCenter)
        self._folder_label.setEnabled(False)
        root.addWidget(self._folder_label)

        self._error_label = QLabel()
        self._error_label.setAlignment(Qt.AlignCenter)
        self._error_label.setWordWrap(True)
        self._error_label.setStyleSheet("color: red;")
        root.addWidget(self._error_label)

        self._empty_label = QLabel()
        self._empty_label.setAlignment(Qt.AlignCenter)
        self._empty_label.setEnabled(False)
        root.addWidget(self._empty_label)

        self._card = SwipeCard(
            self._preview,
            central,
            commit_threshold=self._commit_threshold,
            hint_threshold=self._hint_threshold,
        )
        self._card.setFixedHeight(CARD_HEIGHT_PX)
        root.addWidget(self._card)
        root.addStretch()

        self.setCentralWidget(central)
        self.menu_controller.setup_menus()
        self.statusBar().showMessage("Ready", STATUS_TIMEOUT_MS)

    def _connect_signals(self) -> None:
        handlers = {
            "select_folder": self.on_select_folder,
            "reload": self.on_reload,
            "open_current": self.on_open_current,
            "discard": lambda: self._card.swipe(Disposition.DISCARD),
            "keep": lambda: self._card.swipe(Disposition.KEEP),
            "open_log_directory": lambda: open_log_directory(),
            "exit": self.close,
        }
        self.menu_controller.connect_actions(handlers, on_sort=self.on_sort_changed)
        self._select_button.clicked.connect(self.on_select_folder)
        self._sort_combo.currentIndexChanged.connect(self._on_sort_combo_changed)
        self._card.swiped.connect(self.on_swiped)
        self._card.openRequested.connect(self.on_open_current)
        self.imageLoaded.connect(self._preview.on_image_loaded)

    # Rendering
    def refresh(self) -> None:
        """Re-render every widget from the view-model state."""
        vm = self._vm
        self._folder_label.setText(
            f"Folder: {vm.selected_directory}" if vm.selected_directory else ""
        )
        self._error_label.setText(f"Error: {vm.error_message}" if vm.error_message else "")
        self._error_label.setVisible(bool(vm.error_message))

        criterion = vm.sort_criterion
        index = self._sort_combo.findData(criterion)
        if index >= 0 and index != self._sort_combo.currentIndex():
            self._sort_combo.blockSignals(True)
            self._sort_combo.setCurrentIndex(index)
            self._sort_combo.blockSignals(False)
        self.menu_controller.check_sort(criterion)

        current = vm.current
        has_entry = current is not None
        self._card.setVisible(has_entry)
        self._card.set_entry(current)
        for name in ("open_current", "discard", "keep"):
            self.menu_controller.enable_action(name, has_entry)
        self.menu_controller.enable_action("reload", vm.selected_directory is not None)

        if has_entry:
            self._empty_label.hide()
        else:
            self._empty_label.setText(self._empty_text())
            self._empty_label.setVisible(not vm.error_message or vm.selected_directory is None)
        self.statusBar().showMessage(
            f"{vm.remaining} remaining" if vm.selected_directory else "", 0
        )

    def _empty_text(self) -> str:
        if self._vm.selected_directory is None:
            return PICK_FOLDER_TEXT
        return ALL_DONE_TEXT if self._reviewed_any else NO_FILES_TEXT

    # Handlers
    def on_select_folder(self) -> None:
        start = str(self._vm.selected_directory or "")
        path = QFileDialog.getExistingDirectory(self, "Select Folder", start)
        if not path:
            return
        self._reviewed_any = False
        self._vm.select_directory(path)
        self.refresh()

    def on_reload(self) -> None:
        self._reviewed_any = False
        self._vm.reload()
        self.refresh()

    def on_sort_changed(self, criterion: SortCriterion) -> None:
        self._vm.set_sort_criterion(criterion)
        self.refresh()

    def _on_sort_combo_changed(self, index: int) -> None:
        criterion = self._sort_combo.itemData(index)
        if isinstance(criterion, SortCriterion):
            self.on_sort_changed(criterion)

    def on_swiped(self, disposition: Disposition) -> None:
        try:
            result = self._vm.decide(disposition)
        except Exception:  # pragma: no cover - UI safety net
            logger.exception("Decision failed for {}", disposition)
            return
        if result is None:
            self.refresh()
            return
        self._reviewed_any = True
        self.refresh()
        if result.ok:
            verb = "Moved to Trash" if disposition is Disposition.DISCARD else "Kept"
            self.statusBar().showMessage(f"{verb}: {result.entry.display_name}", STATUS_TIMEOUT_MS)

    def on_open_current(self) -> None:
        if not self._vm.open_current():
            self.refresh()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Release the folder access grant before closing."""
        self._preview.clear()
        self._vm.shutdown()
        event.accept()
