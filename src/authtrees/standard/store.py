"""
Durable key-value stores backing the staged tree.

A store maps byte keys to byte values, iterates in key order and applies a
batch of writes atomically.
"""

from __future__ import annotations

import bisect
import sqlite3
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from authtrees.errors import PersistenceError
from authtrees.logging_config import get_logger

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """Ordered byte-keyed store with atomic batched writes."""

    @abstractmethod
    def get(self, key: bytes) -> Optional[bytes]:
        """Return the value stored under ``key``, or None."""
        pass

    @abstractmethod
    def write_batch(self, items: Iterable[Tuple[bytes, bytes]]) -> None:
        """
        Write all ``(key, value)`` pairs or none of them.

        Raises:
            PersistenceError: If the batch could not be written.
        """
        pass

    @abstractmethod
    def items(self, prefix: bytes = b"") -> Iterator[Tuple[bytes, bytes]]:
        """Iterate over ``(key, value)`` pairs starting with ``prefix`` in key order."""
        pass

    def put(self, key: bytes, value: bytes) -> None:
        self.write_batch([(key, value)])

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class MemoryStore(KeyValueStore):
    """In-process store; nothing survives the process."""

    def __init__(self):
        self._data: Dict[bytes, bytes] = {}
        self._keys: List[bytes] = []

    def get(self, key: bytes) -> Optional[bytes]:
        return self._data.get(bytes(key))

    def write_batch(self, items: Iterable[Tuple[bytes, bytes]]) -> None:
        # Validate the whole batch before touching anything
        batch = []
        for key, value in items:
            if not isinstance(key, (bytes, bytearray)) or not isinstance(value, (bytes, bytearray)):
                raise PersistenceError(
                    f"keys and values must be bytes, got {type(key).__name__}/{type(value).__name__}"
                )
            batch.append((bytes(key), bytes(value)))

        for key, value in batch:
            if key not in self._data:
                bisect.insort(self._keys, key)
            self._data[key] = value

    def items(self, prefix: bytes = b"") -> Iterator[Tuple[bytes, bytes]]:
        start = bisect.bisect_left(self._keys, prefix)
        for key in self._keys[start:]:
            if not key.startswith(prefix):
                break
            yield key, self._data[key]

    def __len__(self) -> int:
        return len(self._data)


class SqliteStore(KeyValueStore):
    """File-backed store; each batch is one sqlite transaction."""

    def __init__(self, path: str):
        self.path = path
        try:
            self._conn = sqlite3.connect(path)
            with self._conn:
                self._conn.execute(
                    "CREATE TABLE IF NOT EXISTS kv (k BLOB PRIMARY KEY, v BLOB NOT NULL)"
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"cannot open store at {path}: {e}") from e

    def get(self, key: bytes) -> Optional[bytes]:
        try:
            row = self._conn.execute("SELECT v FROM kv WHERE k = ?", (bytes(key),)).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"read failed: {e}") from e
        return None if row is None else bytes(row[0])

    def write_batch(self, items: Iterable[Tuple[bytes, bytes]]) -> None:
        batch = [(bytes(k), bytes(v)) for k, v in items]
        try:
            with self._conn:
                self._conn.executemany("INSERT OR REPLACE INTO kv (k, v) VALUES (?, ?)", batch)
        except sqlite3.Error as e:
            raise PersistenceError(f"batch write of {len(batch)} entries failed: {e}") from e
        logger.debug("Wrote %d entries to %s", len(batch), self.path)

    def items(self, prefix: bytes = b"") -> Iterator[Tuple[bytes, bytes]]:
        try:
            rows = self._conn.execute(
                "SELECT k, v FROM kv WHERE k >= ? ORDER BY k", (bytes(prefix),)
            ).fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"read failed: {e}") from e
        for k, v in rows:
            k = bytes(k)
            if not k.startswith(prefix):
                break
            yield k, bytes(v)

    def close(self) -> None:
        self._conn.close()
