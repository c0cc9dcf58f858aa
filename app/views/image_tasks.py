from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger


class _ImageTask(QRunnable):
    """QRunnable for background preview decoding.

    Emits `receiver.imageLoaded(token, path, image)` upon completion. The
    receiver is expected to own a Qt `Signal(str, str, object)` named
    `imageLoaded`; `image` is None when decoding failed.
    """

    def __init__(
        self, *, path: str, side: int, service: Any, receiver: QObject, token: str
    ) -> None:
        super().__init__()
        self._path = path
        self._side = side
        self._service = service
        self._receiver = receiver
        self._token = token

    def run(self) -> None:  # type: ignore[override]
        try:
            img = self._service.get_preview(self._path, self._side)
        except Exception as ex:  # pragma: no cover - GUI background task
            logger.error("Image task failed for {}: {}", self._path, ex)
            img = None
        try:
            receiver: Any = self._receiver
            receiver.imageLoaded.emit(self._token, self._path, img)
        except RuntimeError as ex:  # pragma: no cover - receiver already destroyed
            logger.debug("Image task receiver gone: {}", ex)


class ImageTaskRunner:
    """Dispatches preview decode tasks to the global thread pool.

    Each request gets a fresh token "preview|{serial}|{path}" so results for a
    card that has since been swiped away can be recognised and dropped.
    """

    def __init__(self, *, service: Any, receiver: QObject) -> None:
        self._service = service
        self._receiver = receiver
        self._pool = QThreadPool.globalInstance()
        self._serial = 0

    def request_preview(self, path: str, side: int = 0) -> str:
        """Request a bounded preview of `path`. Returns the token string."""
        self._serial += 1
        token = f"preview|{self._serial}|{path}"
        if self._service is None:
            return token
        task = _ImageTask(
            path=path,
            side=side,
            service=self._service,
            receiver=self._receiver,
            token=token,
        )
        self._pool.start(task)
        return token
