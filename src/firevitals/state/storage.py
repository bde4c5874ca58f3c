"""Key/value blob storage backends.

The store persists each schema version under its own key. Backends only
move strings around; parsing and validation belong to the store.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Protocol

from firevitals.exceptions import FireVitalsStorageError

_logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class KeyValueStorage(Protocol):
    """Structural storage interface used by the state store.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`JsonFileStorage`) concrete.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage, mainly for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStorage:
    """One file per key inside a data directory.

    Writes go to a temporary file that is then renamed over the target, so
    a crash mid-write leaves the previous blob intact.
    """

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        safe = _UNSAFE_KEY_CHARS.sub("_", key).strip("_") or "state"
        return self._directory / f"{safe}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise FireVitalsStorageError(f"Could not read {path}: {exc}", key=key) from exc

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{path.stem}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise FireVitalsStorageError(f"Could not write {path}: {exc}", key=key) from exc
        _logger.debug("Wrote %d bytes to %s", len(value), path)

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise FireVitalsStorageError(f"Could not remove {path}: {exc}", key=key) from exc
