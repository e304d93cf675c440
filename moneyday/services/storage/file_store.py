"""
Local File Storage Implementation

DESIGN DECISION: Each key is one file inside a data directory
(``<directory>/<key>.json``). A phone app would keep this in its
preferences store; on a desktop a directory of small files plays
the same role.

Writes go to a temporary file in the same directory and are then
moved into place with ``os.replace``. The rename is atomic, so the
stored payload is either the old one or the new one, never a
half-written mix.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from moneyday.services.storage.interface import (
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileKeyValueStorage(KeyValueStorageInterface):
    """
    File-per-key storage rooted at a directory.

    The directory is created on first write.
    """

    def __init__(self, directory: Path, suffix: str = ".json"):
        self._directory = Path(directory).expanduser()
        self._suffix = suffix

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Map a key to its file, rejecting keys that could escape the directory."""
        if not _KEY_PATTERN.match(key) or key in {".", ".."}:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{self._suffix}"

    def load(self, key: str) -> Optional[bytes]:
        try:
            path = self.path_for(key)
        except ValueError as e:
            raise StorageReadError(str(e)) from e
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageReadError(f"Could not read {path}: {e}") from e

    def save(self, key: str, data: bytes) -> bool:
        try:
            path = self.path_for(key)
        except ValueError as e:
            raise StorageWriteError(str(e)) from e
        tmp_name = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory,
                prefix=f".{key}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StorageWriteError(f"Could not write {path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        return True

    def delete(self, key: str) -> bool:
        try:
            path = self.path_for(key)
        except ValueError as e:
            raise StorageWriteError(str(e)) from e
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageWriteError(f"Could not delete {path}: {e}") from e
        return True
