"""Pytest bootstrap and shared fakes.

The ``pytest`` console script can run with a sys.path that excludes the
repository root. Ensure the top-level packages resolve to the local sources.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
import sys
from typing import Iterator

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT_STR = str(PROJECT_ROOT)

if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)

from core.errors import AccessDenied  # noqa: E402
from core.models import FAR_PAST, FileEntry  # noqa: E402


def make_entry(
    name: str,
    size: int = 0,
    modified: datetime = FAR_PAST,
    folder: str = "/review",
    is_container: bool = False,
) -> FileEntry:
    location = Path(folder) / name
    return FileEntry(
        identity=str(location),
        display_name=name,
        location=location,
        is_container=is_container,
        size_bytes=size,
        modified_at=modified,
    )


class FakeTrash:
    """Records trash calls; optionally fails through `error`."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self.error = error
        self.observer = None

    def move_to_trash(self, path: str) -> None:
        self.calls.append(path)
        if self.observer is not None:
            self.observer(path)
        if self.error is not None:
            raise self.error


class FakeGrant:
    """Access grant that can be switched off without touching the filesystem."""

    def __init__(self, path: str | Path = "/review", allowed: bool = True) -> None:
        self.path = Path(path)
        self.allowed = allowed
        self.activations = 0
        self.released = False

    @contextmanager
    def access(self) -> Iterator[None]:
        if not self.allowed or self.released:
            raise AccessDenied("Lost access to folder. Please select it again.")
        self.activations += 1
        yield

    def release(self) -> None:
        self.released = True


@pytest.fixture
def trash() -> FakeTrash:
    return FakeTrash()


@pytest.fixture
def grant() -> FakeGrant:
    return FakeGrant()
