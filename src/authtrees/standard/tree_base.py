"""Append-only merkle trees with pending leaves staged over a durable store.

Nodes are addressed by ``(level, index)`` where level 0 is the root and level
``depth`` holds the leaves. Pending nodes live in an in-memory cache that is
consulted before the store; ``commit`` writes the cache and the tree metadata
in a single batch.
"""

from __future__ import annotations

import struct
from typing import Dict, List, Optional, Sequence, Tuple

from authtrees.errors import PersistenceError, TreeCapacityError
from authtrees.field import FIELD_BYTES, MODULUS, field_from_bytes, field_to_bytes
from authtrees.hashing import EMPTY_VALUE, Hasher, zero_hashes
from authtrees.logging_config import get_logger
from authtrees.standard.sibling_path import SiblingPath
from authtrees.standard.store import KeyValueStore

logger = get_logger(__name__)

_META_FORMAT = ">I"
_META_LEN = FIELD_BYTES + 4 + FIELD_BYTES


def encode_meta(root: int, depth: int, size: int) -> bytes:
    """root (32 bytes) | depth (4 bytes) | size (32 bytes)"""
    return field_to_bytes(root) + struct.pack(_META_FORMAT, depth) + size.to_bytes(FIELD_BYTES, 'big')


def decode_meta(buf: bytes) -> Tuple[int, int, int]:
    if len(buf) != _META_LEN:
        raise PersistenceError(f"corrupt tree metadata: expected {_META_LEN} bytes, got {len(buf)}")
    try:
        root = field_from_bytes(buf[:FIELD_BYTES])
    except ValueError as e:
        raise PersistenceError(f"corrupt tree metadata: bad root ({e})") from e
    (depth,) = struct.unpack(_META_FORMAT, buf[FIELD_BYTES:FIELD_BYTES + 4])
    size = int.from_bytes(buf[FIELD_BYTES + 4:], 'big')
    if depth < 1 or (depth < 8 * FIELD_BYTES and size > 1 << depth):
        raise PersistenceError(f"corrupt tree metadata: depth {depth}, size {size}")
    return root, depth, size


class TreeBase:
    """Fixed-height merkle tree over a :class:`KeyValueStore`."""

    def __init__(
        self,
        store: KeyValueStore,
        hasher: Hasher,
        name: str,
        depth: int,
        size: int = 0,
        root: Optional[int] = None,
    ):
        if depth < 1:
            raise ValueError(f"depth must be at least 1, got {depth}")
        if ":" in name:
            raise ValueError(f"tree name must not contain ':', got {name!r}")
        self.store = store
        self.hasher = hasher
        self.name = name
        self.depth = depth
        # zero_hashes[h] is the root of an empty subtree of height h
        self.zero_hashes = zero_hashes(hasher, depth, EMPTY_VALUE)
        self.root = root if root is not None else self.zero_hashes[depth]
        self.size = size
        self.cache: Dict[Tuple[int, int], int] = {}
        self.cached_size: Optional[int] = None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name!r}, depth={self.depth}, "
            f"size={self.size}, pending={self.get_num_leaves(True) - self.size})"
        )

    @property
    def max_leaves(self) -> int:
        return 1 << self.depth

    def get_depth(self) -> int:
        return self.depth

    def get_root(self, include_uncommitted: bool) -> int:
        """Root over the committed leaves, or over committed and pending leaves."""
        if include_uncommitted:
            return self.cache.get((0, 0), self.root)
        return self.root

    def get_num_leaves(self, include_uncommitted: bool) -> int:
        if include_uncommitted and self.cached_size is not None:
            return self.cached_size
        return self.size

    def has_pending(self) -> bool:
        return self.cached_size is not None and self.cached_size != self.size

    def _node_key(self, level: int, index: int) -> bytes:
        return f"{self.name}:{level}:{index}".encode()

    def _meta_key(self) -> bytes:
        return self.name.encode()

    def _get_latest_value_at_index(
        self, level: int, index: int, include_uncommitted: bool
    ) -> Optional[int]:
        if include_uncommitted:
            value = self.cache.get((level, index))
            if value is not None:
                return value
        key = self._node_key(level, index)
        buf = self.store.get(key)
        if buf is None:
            return None
        try:
            return field_from_bytes(buf)
        except ValueError as e:
            raise PersistenceError(f"corrupt node {key.decode()!r}: {e}") from e

    def get_leaf_value(self, index: int, include_uncommitted: bool) -> Optional[int]:
        """The leaf at ``index``, or None if it is not visible in the chosen view."""
        if index < 0 or index >= self.get_num_leaves(include_uncommitted):
            return None
        return self._get_latest_value_at_index(self.depth, index, include_uncommitted)

    def get_sibling_path(self, index: int, include_uncommitted: bool) -> SiblingPath:
        """Siblings of leaf ``index`` from the leaf level up, in the chosen view."""
        if index < 0 or index >= self.max_leaves:
            raise IndexError(f"leaf index {index} out of range for depth {self.depth}")
        path: List[int] = []
        level = self.depth
        for height in range(self.depth):
            sibling = self._get_latest_value_at_index(level, index ^ 1, include_uncommitted)
            path.append(sibling if sibling is not None else self.zero_hashes[height])
            index >>= 1
            level -= 1
        return SiblingPath(path)

    def _add_leaf_to_cache_and_hash_to_root(self, leaf: int, index: int) -> None:
        level = self.depth
        current = leaf
        self.cache[(level, index)] = current
        for height in range(self.depth):
            sibling = self._get_latest_value_at_index(level, index ^ 1, True)
            if sibling is None:
                sibling = self.zero_hashes[height]
            if index & 1:
                current = self.hasher([sibling, current])
            else:
                current = self.hasher([current, sibling])
            index >>= 1
            level -= 1
            self.cache[(level, index)] = current

    def commit(self) -> None:
        """
        Persist every pending node and the tree metadata in one batch.

        Raises:
            PersistenceError: If the store rejects the batch. Pending leaves
                are kept so the commit can be retried.
        """
        root = self.get_root(True)
        size = self.get_num_leaves(True)
        batch = [
            (self._node_key(level, index), field_to_bytes(value))
            for (level, index), value in self.cache.items()
        ]
        batch.append((self._meta_key(), encode_meta(root, self.depth, size)))
        try:
            self.store.write_batch(batch)
        except PersistenceError:
            logger.error("Commit of tree %r failed, %d pending nodes kept", self.name, len(self.cache))
            raise
        except Exception as e:
            logger.error("Commit of tree %r failed, %d pending nodes kept", self.name, len(self.cache))
            raise PersistenceError(f"commit of tree {self.name!r} failed: {e}") from e

        logger.debug(
            "Committed tree %r: %d -> %d leaves, %d nodes written",
            self.name, self.size, size, len(batch) - 1,
        )
        self.root = root
        self.size = size
        self._clear_cache()

    def rollback(self) -> None:
        """Discard all pending leaves."""
        if self.cache:
            logger.debug("Rolling back %d pending nodes of tree %r", len(self.cache), self.name)
        self._clear_cache()

    def _clear_cache(self) -> None:
        self.cache = {}
        self.cached_size = None

    @classmethod
    def load_meta(cls, store: KeyValueStore, name: str) -> Optional[Tuple[int, int, int]]:
        """``(root, depth, size)`` stored for ``name``, or None."""
        buf = store.get(name.encode())
        if buf is None:
            return None
        return decode_meta(buf)


class StandardTree(TreeBase):
    """Append-only tree: leaves are only ever added at the next free index."""

    def append_leaves(self, leaves: Sequence[int]) -> None:
        """
        Stage ``leaves`` at the next free indices.

        Raises:
            TreeCapacityError: If the tree would hold more than ``2**depth`` leaves.
            ValueError: If a leaf is not a field element.
        """
        leaves = list(leaves)
        for leaf in leaves:
            if not isinstance(leaf, int) or not 0 <= leaf < MODULUS:
                raise ValueError(f"leaf {leaf!r} is not a field element")
        num_leaves = self.get_num_leaves(True)
        if num_leaves + len(leaves) > self.max_leaves:
            raise TreeCapacityError(
                f"cannot append {len(leaves)} leaves to tree {self.name!r} holding "
                f"{num_leaves} of {self.max_leaves}"
            )
        for i, leaf in enumerate(leaves):
            self._add_leaf_to_cache_and_hash_to_root(leaf, num_leaves + i)
        self.cached_size = num_leaves + len(leaves)

