"""In-memory full sparse merkle tree.

Holds every non-empty leaf and recomputes subtree roots on demand, so it is
only suitable for modest key counts. It is the usual source of the branches
fed into :class:`~authtrees.smt.deep_subtree.DeepSparseMerkleSubTree`.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from authtrees.hashing import EMPTY_VALUE, SMT_DEPTH, zero_hashes
from authtrees.logging_config import get_logger
from authtrees.smt.deep_subtree import SubtreeConfig
from authtrees.smt.proofs import SparseMerkleProof

logger = get_logger(__name__)


class SparseMerkleTree:
    """Full-depth sparse merkle tree keyed by path hash."""

    def __init__(self, config: Optional[SubtreeConfig] = None, depth: int = SMT_DEPTH):
        if depth <= 0:
            raise ValueError(f"depth must be positive, got {depth}")
        self.config = config if config is not None else SubtreeConfig()
        self.hasher = self.config.hasher
        self.depth = depth
        self.zero_hashes = zero_hashes(self.hasher, depth, EMPTY_VALUE)
        # path hash -> value hash, empty values are never stored
        self.leaves: Dict[int, int] = {}
        self._root: Optional[int] = self.zero_hashes[depth]

    def key_path(self, key) -> int:
        fields = self.config.encode_key(key)
        if self.config.hash_key:
            return self.hasher(fields)
        return fields[0]

    def value_hash(self, value=None) -> int:
        if value is None:
            return EMPTY_VALUE
        fields = self.config.encode_value(value)
        if self.config.hash_value:
            return self.hasher(fields)
        return fields[0]

    def __len__(self) -> int:
        return len(self.leaves)

    def get_root(self) -> int:
        if self._root is None:
            self._root = self._subtree_root(list(self.leaves), 0)
        return self._root

    def get_value_hash(self, key) -> int:
        return self.leaves.get(self.key_path(key), EMPTY_VALUE)

    def has(self, key, value=None) -> bool:
        return self.get_value_hash(key) == self.value_hash(value)

    def update(self, key, value=None) -> int:
        """Set ``key`` to ``value`` (``None`` deletes it) and return the new root."""
        path = self.key_path(key)
        value_hash = self.value_hash(value)
        if value_hash == EMPTY_VALUE:
            self.leaves.pop(path, None)
        else:
            self.leaves[path] = value_hash
        self._root = None
        return self.get_root()

    def _bit(self, path: int, level: int) -> int:
        return (path >> level) & 1

    def _subtree_root(self, paths: List[int], level: int) -> int:
        """Root of the subtree at ``level`` holding ``paths``."""
        if not paths:
            return self.zero_hashes[self.depth - level]
        if level == self.depth:
            # paths agreeing on all depth bits share a leaf
            return self.leaves[paths[0]]
        left = [p for p in paths if not self._bit(p, level)]
        right = [p for p in paths if self._bit(p, level)]
        return self.hasher([self._subtree_root(left, level + 1), self._subtree_root(right, level + 1)])

    def prove(self, key) -> SparseMerkleProof:
        """Proof of the current value (or absence) of ``key``."""
        path = self.key_path(key)
        side_nodes = []
        paths = list(self.leaves)
        for level in range(self.depth):
            bit = self._bit(path, level)
            same = [p for p in paths if self._bit(p, level) == bit]
            other = [p for p in paths if self._bit(p, level) != bit]
            side_nodes.append(self._subtree_root(other, level + 1))
            paths = same
        return SparseMerkleProof(tuple(side_nodes), self.get_root())
