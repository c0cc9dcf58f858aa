"""MenuController: Manages menu creation and action connections."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction, QActionGroup, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMenuBar

from core.models import SortCriterion


class MenuController:
    """Manages main window menu creation and action connections.

    This class encapsulates all menu-related functionality including:
    - Menu structure creation
    - Sort criterion actions kept mutually exclusive
    - Action-to-handler connection management
    """

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to create menus for
        """
        self.window = main_window
        self.actions: dict[str, QAction] = {}
        self.sort_actions: dict[SortCriterion, QAction] = {}

    def setup_menus(self) -> dict[str, QAction]:
        """Create all menus and return action references."""
        menubar = QMenuBar(self.window)

        file_menu = menubar.addMenu("File")
        self.actions["select_folder"] = file_menu.addAction("Select Folder…")
        self.actions["select_folder"].setShortcut(QKeySequence.StandardKey.Open)
        self.actions["reload"] = file_menu.addAction("Reload")
        self.actions["reload"].setShortcut(QKeySequence.StandardKey.Refresh)
        self.actions["open_current"] = file_menu.addAction("Open in Default App")
        self.actions["open_current"].setShortcut(QKeySequence("Ctrl+Return"))
        file_menu.addSeparator()
        self.actions["exit"] = file_menu.addAction("Exit")

        review_menu = menubar.addMenu("Review")
        self.actions["discard"] = review_menu.addAction("Move to Trash")
        self.actions["discard"].setShortcuts(
            [QKeySequence(QKeySequence.StandardKey.Delete), QKeySequence("Left")]
        )
        self.actions["keep"] = review_menu.addAction("Keep")
        self.actions["keep"].setShortcuts([QKeySequence("Right"), QKeySequence("Space")])

        sort_menu = menubar.addMenu("Sort")
        group = QActionGroup(self.window)
        group.setExclusive(True)
        for criterion in SortCriterion:
            action = sort_menu.addAction(criterion.label)
            action.setCheckable(True)
            group.addAction(action)
            self.sort_actions[criterion] = action

        log_menu = menubar.addMenu("Log")
        self.actions["open_log_directory"] = log_menu.addAction("Open Log Directory")

        self.window.setMenuBar(menubar)
        return self.actions

    def connect_actions(
        self,
        handlers: dict[str, Callable],
        on_sort: Callable[[SortCriterion], None] | None = None,
    ) -> None:
        """Connect menu actions to their handler methods.

        Args:
            handlers: Dictionary mapping action names to handler callables
            on_sort: Called with the criterion chosen from the Sort menu
        """
        for name, action in self.actions.items():
            if name in handlers:
                action.triggered.connect(handlers[name])
        if "exit" not in handlers:
            self.actions["exit"].triggered.connect(self.window.close)

        if on_sort is not None:
            for criterion, action in self.sort_actions.items():
                action.triggered.connect(lambda _checked=False, c=criterion: on_sort(c))

    def check_sort(self, criterion: SortCriterion) -> None:
        """Reflect the active criterion in the Sort menu."""
        action = self.sort_actions.get(criterion)
        if action is not None:
            action.setChecked(True)

    def enable_action(self, name: str, enabled: bool = True) -> None:
        """Enable or disable a specific action.

        Args:
            name: Action name
            enabled: Whether to enable the action
        """
        action = self.actions.get(name)
        if action:
            action.setEnabled(enabled)
