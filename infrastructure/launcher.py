"""Open files with the platform's default application."""

from __future__ import annotations

import os
from pathlib import Path
import subprocess
import sys

from loguru import logger

from core.errors import AccessDenied, OpenFailed
from core.services.interfaces import AccessGrant


def _launch(path: str) -> None:
    if sys.platform == "win32":
        os.startfile(path)  # type: ignore[attr-defined]  # pylint: disable=no-member
    elif sys.platform == "darwin":
        subprocess.run(["open", path], check=True)
    else:
        subprocess.run(["xdg-open", path], check=True)


def open_in_default_app(path: str | Path, grant: AccessGrant | None = None) -> None:
    """Open `path` in its default handler while `grant` is active.

    Raises:
        OpenFailed: The file is missing, access was lost, or the launch failed.
    """
    target = str(path)
    name = os.path.basename(target)
    try:
        if grant is None:
            _launch_checked(target)
        else:
            with grant.access():
                _launch_checked(target)
    except AccessDenied as ex:
        raise OpenFailed(f"Could not open {name}: {ex.message}") from ex
    except (OSError, subprocess.CalledProcessError) as ex:
        logger.error("Open in default app failed for {}: {}", target, ex)
        raise OpenFailed(f"Could not open {name}: {ex}") from ex
    logger.info("Opened in default app: {}", target)


def _launch_checked(target: str) -> None:
    if not os.path.exists(target):
        raise FileNotFoundError(2, "No such file or directory", target)
    _launch(target)


def open_directory(path: str | Path) -> bool:
    """Open a directory in the file manager; False on failure."""
    try:
        _launch(str(path))
        return True
    except (OSError, subprocess.CalledProcessError) as ex:
        logger.warning("Open directory failed for {}: {}", path, ex)
        return False
