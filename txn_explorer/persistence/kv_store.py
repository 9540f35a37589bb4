"""Key-value stores backing rules and the auth flag.

Values are opaque strings. ``InMemoryKeyValueStore`` is used in tests;
``JsonFileKeyValueStore`` keeps every key in one JSON document on disk.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from txn_explorer.core.config import StorageBackend, StorageConfig

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Process-local store."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """Store persisted as a single JSON object.

    Every write rewrites the whole file through a temporary file and an
    atomic rename, so a failed write leaves the previous content in place.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            return {}
        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    async def get(self, key: str) -> str | None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
        value = data.get(key)
        return value if value is None else str(value)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            data[key] = value
            await asyncio.to_thread(self._write_all, data)

    async def delete(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            if key in data:
                del data[key]
                await asyncio.to_thread(self._write_all, data)


def create_store(config: StorageConfig) -> KeyValueStore:
    """Build the store selected by ``STORAGE_BACKEND``."""
    if config.backend == StorageBackend.MEMORY:
        logger.info("Using in-memory key-value store")
        return InMemoryKeyValueStore()
    logger.info("Using JSON file key-value store", extra={"path": config.path})
    return JsonFileKeyValueStore(config.path)
