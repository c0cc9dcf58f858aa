"""Settings access helpers for JSON-based configuration.

Settings are optional, read-only overrides. The application never writes a
settings file; a missing or malformed file means built-in defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path | None = None) -> None:
        self._path = Path(settings_path) if settings_path else None
        self._data: dict[str, Any] = {}
        if self._path is None or not self._path.exists():
            return
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as ex:
            logger.warning("Ignoring unreadable settings file {}: {}", self._path, ex)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            logger.warning("Ignoring settings file {}: top level is not an object", self._path)

    @property
    def path(self) -> Path | None:
        return self._path

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def get_int(self, key: str, default: int) -> int:
        """Integer value for `key`; `default` when missing or invalid."""
        try:
            return int(self.get(key, default))
        except (TypeError, ValueError):
            logger.warning("Invalid integer for setting {}; using {}", key, default)
            return default

    def get_float(self, key: str, default: float) -> float:
        """Float value for `key`; `default` when missing or invalid."""
        try:
            return float(self.get(key, default))
        except (TypeError, ValueError):
            logger.warning("Invalid number for setting {}; using {}", key, default)
            return default
