"""A JSON document on disk with dot-notation access.

::

    settings = JsonFile("config/site.json")
    settings.load()
    settings.get("mail.host", "localhost")
    settings.set("mail.port", 587)
    settings.save()

Nested keys are addressed as ``"a.b.c"``; ``set`` creates (or replaces
with) intermediate objects as needed.
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from sprig.errors import SprigError

logger = logging.getLogger("sprig.storage")

_MISSING = object()


class StorageError(SprigError):
    """Raised when a JSON file cannot be read, decoded, encoded, or written."""


class JsonFile:
    """Load, query, modify, and save one JSON file."""

    __slots__ = ("_data", "_loaded", "_path")

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, Any] | None = None
        self._loaded = False

    def __repr__(self) -> str:
        return f"JsonFile({str(self._path)!r}, loaded={self._loaded})"

    @property
    def path(self) -> Path:
        return self._path

    @path.setter
    def path(self, value: str | Path) -> None:
        """Point at another file; forgets any loaded data."""
        self._path = Path(value)
        self._data = None
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def data(self) -> dict[str, Any] | None:
        return self._data

    @data.setter
    def data(self, value: dict[str, Any]) -> None:
        self._data = value
        self._loaded = True

    # -- File I/O --

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> dict[str, Any]:
        """Read and decode the file. Raises ``StorageError`` on failure."""
        self._loaded = False
        if not self._path.exists():
            msg = f"File '{self._path}' not found."
            raise StorageError(msg)
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Could not read file '{self._path}'."
            raise StorageError(msg) from exc
        try:
            data = json.loads(content)
        except ValueError as exc:
            msg = f"JSON decode error: {exc}"
            raise StorageError(msg) from exc
        self._data = data
        self._loaded = True
        return data

    def save(self, *, pretty: bool = True) -> None:
        """Encode the current data and write it back to the file."""
        if self._data is None:
            msg = "No data to save."
            raise StorageError(msg)
        try:
            content = json.dumps(self._data, ensure_ascii=False, indent=4 if pretty else None)
        except (TypeError, ValueError) as exc:
            msg = f"JSON encode error: {exc}"
            raise StorageError(msg) from exc
        try:
            self._path.write_text(content, encoding="utf-8")
        except OSError as exc:
            msg = f"Could not write to file '{self._path}'."
            raise StorageError(msg) from exc
        logger.debug("saved %s (%d bytes)", self._path, len(content))

    def file_info(self) -> dict[str, Any] | None:
        """Size, timestamps, and access flags, or ``None`` if the file is missing."""
        if not self.exists():
            return None
        stat = self._path.stat()
        fmt = "%Y-%m-%d %H:%M:%S"
        return {
            "size": stat.st_size,
            "modified": datetime.fromtimestamp(stat.st_mtime).strftime(fmt),
            "created": datetime.fromtimestamp(stat.st_ctime).strftime(fmt),
            "readable": os.access(self._path, os.R_OK),
            "writable": os.access(self._path, os.W_OK),
        }

    # -- Dot-notation access --

    def _walk(self, key: str) -> Any:
        if not self._loaded or self._data is None:
            return _MISSING
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return _MISSING
            current = current[part]
        return current

    def get(self, key: str, default: Any = None) -> Any:
        value = self._walk(key)
        return default if value is _MISSING else value

    def has(self, key: str) -> bool:
        return self._walk(key) is not _MISSING

    def set(self, key: str, value: Any) -> None:
        if self._data is None:
            self._data = {}
        if not isinstance(self._data, dict):
            msg = f"Cannot set '{key}': {self._path} does not hold a JSON object"
            raise StorageError(msg)
        *parents, last = key.split(".")
        current = self._data
        for part in parents:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[last] = value
        self._loaded = True

    def remove(self, key: str) -> bool:
        """Delete *key*; True if it existed."""
        *parents, last = key.split(".")
        parent = self._walk(".".join(parents)) if parents else self._data
        if not self._loaded or not isinstance(parent, dict) or last not in parent:
            return False
        del parent[last]
        return True
