from __future__ import annotations

import os
from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.main_vm import MainVM
from app.views.main_window import MainWindow
from core.models import SortCriterion
from core.services.classifier import MAX_IMAGE_PREVIEW_BYTES
from infrastructure.delete_service import DeleteService
from infrastructure.directory_repository import DirectoryRepository
from infrastructure.image_service import ImageService
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings

BASE_DIR = Path(__file__).parent

# Optional read-only overrides; see DESIGN.md for the recognised keys
SETTINGS_ENV_VAR = "SWIPE_FILES_SETTINGS"


def _settings_path() -> Path:
    return Path(os.environ.get(SETTINGS_ENV_VAR) or BASE_DIR / "settings.json")


def main() -> int:
    settings = JsonSettings(_settings_path())
    log_dir = init_logging(settings.get("logging.dir"), str(settings.get("logging.level", "INFO")))
    logger.info("Swipe Files starting; logs in {}", log_dir)

    app = QApplication(sys.argv)

    vm = MainVM(
        DirectoryRepository(),
        DeleteService(),
        default_sort=SortCriterion.parse(settings.get("sorting.default", "name")),
        max_image_bytes=settings.get_int("preview.image_max_bytes", MAX_IMAGE_PREVIEW_BYTES),
    )
    win = MainWindow(vm=vm, image_service=ImageService(settings), settings=settings)
    win.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
