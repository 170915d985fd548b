"""
JSON File Key-Value Store

All keys live in one JSON object on disk:

    {"budgetCalculator": "{\"monthlyIncome\": 50000, ...}"}

A missing or corrupt file reads as an empty store. Writes go to a
temporary file in the same directory which then replaces the target,
so a crash mid-write never leaves a truncated file behind.

File operations are retried on OSError (e.g. a file briefly locked by
a sync client or antivirus scanner) before surfacing a StorageError.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from budget_allocator.services.storage.interface import KeyValueStore, StorageError


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Key-value store persisted as a single JSON document.
    """

    def __init__(self, path: Path, retry_attempts: int = 3):
        """
        Args:
            path: JSON file holding the store. Created on first write.
            retry_attempts: Attempts per file operation before giving up.
        """
        self._path = Path(path)
        self._retrying = Retrying(
            stop=stop_after_attempt(retry_attempts),
            wait=wait_exponential(multiplier=0.05, max=1),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        raw = self._path.read_bytes()
        try:
            data = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            logger.warning("store_file_corrupt", path=str(self._path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("store_file_not_object", path=str(self._path))
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _load(self) -> dict[str, str]:
        try:
            return self._retrying(self._read_all)
        except OSError as e:
            raise StorageError(f"Failed to read store {self._path}: {e}") from e

    def _store(self, data: dict[str, str]) -> None:
        try:
            self._retrying(self._write_all, data)
        except OSError as e:
            raise StorageError(f"Failed to write store {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._store(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._store(data)
