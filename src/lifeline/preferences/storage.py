"""
Key-value storage backends for user preferences.

The storage holds plain string items (the selected provider, and optionally
API keys). It is the persistent counterpart of a browser's localStorage:
last write wins, nothing is locked.
"""

from __future__ import annotations

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

_logger = _logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage cannot be read or written."""

    pass


class KeyValueStore(_typing.Protocol):
    """Minimal string key-value storage interface."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process storage. Contents are lost when the process exits."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileStore:
    """
    Storage persisted as a single JSON object on disk.

    The file is read on every access and rewritten on every write, so
    several processes sharing the file see each other's changes.
    A missing file reads as empty. A write replaces a file whose contents
    cannot be read.
    """

    def __init__(self, path: _pathlib.Path | str) -> None:
        self._path = _pathlib.Path(path)

    @property
    def path(self) -> _pathlib.Path:
        return self._path

    def _read(self) -> dict[str, _typing.Any]:
        if not self._path.exists():
            return {}
        try:
            data = _json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StorageError(f"Cannot read preferences file {self._path}: {e}") from e
        except UnicodeDecodeError as e:
            raise StorageError(f"Preferences file {self._path} is not UTF-8: {e}") from e
        except _json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in preferences file {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(
                f"Preferences file must contain a JSON object: {self._path}"
            )
        return data

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        if value is None:
            return None
        return str(value)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except StorageError as e:
            # unreadable contents are replaced
            _logger.warning("Overwriting unreadable preferences file: %s", e)
            data = {}
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(_json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write preferences file {self._path}: {e}") from e

