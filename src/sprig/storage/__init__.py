"""File-backed storage helpers."""

from sprig.storage.jsonfile import JsonFile, StorageError

__all__ = ["JsonFile", "StorageError"]
