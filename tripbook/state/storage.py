"""Persistence media for the trip state blob."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StateStorage(Protocol):
    """Key-value store holding one JSON document per key."""

    def read(self, key: str) -> str | None:
        """Return the stored document, or None if nothing is stored."""
        ...

    def write(self, key: str, blob: str) -> None:
        """Replace the stored document."""
        ...


class InMemoryStorage:
    """In-memory implementation of StateStorage."""

    def __init__(self) -> None:
        self._blobs: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self._blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self._blobs[key] = blob


class JsonFileStorage:
    """One ``<key>.json`` file per key under ``directory``.

    Writes go to a temporary file first and are swapped in with os.replace,
    so a crash mid-write leaves the previous document intact.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return None

    def write(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
