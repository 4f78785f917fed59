"""
Local storage backends.

`InMemoryBlobStorage` keeps blobs in a dict (tests, throwaway sessions).
`FileBlobStorage` keeps one JSON file per key in a data directory. Writes
go to a temporary file first and are moved into place, so a crash never
leaves a half-written blob behind.
"""

import asyncio
import hashlib
import os
import tempfile
from pathlib import Path
from typing import Optional

from networth_tracker.services.storage.interface import (
    BlobStorageInterface,
    SerializationError,
    StorageError,
)


class InMemoryBlobStorage(BlobStorageInterface):
    """Dict-backed storage. Data lives as long as the instance."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._items


class FileBlobStorage(BlobStorageInterface):
    """
    One file per key under `data_dir`.

    Keys like "@net_worth_tracker_v1" are not safe file names everywhere,
    so the file name is derived from the key.
    """

    def __init__(self, data_dir: Path):
        self._data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        safe = "".join(c if c.isalnum() or c in "-_" else "_" for c in key).strip("_")
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:8]
        return self._data_dir / f"{safe or 'state'}-{digest}.json"

    def _read(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise SerializationError(f"{path} is not valid UTF-8: {e}")
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}")

    def _write(self, path: Path, value: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}")

    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, self.path_for(key), value)
