"""Deep sparse merkle subtree.

A partial, in-memory mirror of a full-depth sparse merkle tree covering only
the keys for which a branch (proof) was supplied. It can re-prove those keys
and update their values without materializing the full tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from authtrees.errors import IncompleteSubtreeError, InvalidProofError, UnknownKeyError
from authtrees.field import to_bits, to_fields
from authtrees.hashing import EMPTY_VALUE, SMT_DEPTH, Hasher, sha256_hasher
from authtrees.logging_config import get_logger
from authtrees.smt.proofs import SparseMerkleProof, verify_proof_with_updates

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubtreeConfig:
    """How keys and values are turned into path and value hashes.

    When ``hash_key``/``hash_value`` is false the first field of the encoding
    is used as is.
    """
    hasher: Hasher = sha256_hasher
    hash_key: bool = True
    hash_value: bool = True
    encode_key: Callable[[Any], List[int]] = field(default=to_fields)
    encode_value: Callable[[Any], List[int]] = field(default=to_fields)


class DeepSparseMerkleSubTree:
    """Partial view of a sparse merkle tree built from verified branches."""

    def __init__(
        self,
        root: int,
        config: Optional[SubtreeConfig] = None,
        depth: int = SMT_DEPTH,
    ):
        if depth <= 0:
            raise ValueError(f"depth must be positive, got {depth}")
        self.root = root
        self.depth = depth
        self.config = config if config is not None else SubtreeConfig()
        self.hasher = self.config.hasher
        # node hash -> children (a single element for leaf value hashes)
        self.node_store: Dict[int, List[int]] = {}
        # path hash -> value hash
        self.value_store: Dict[int, int] = {}

    def get_root(self) -> int:
        return self.root

    def get_height(self) -> int:
        return self.depth

    def __len__(self) -> int:
        return len(self.value_store)

    def __contains__(self, key) -> bool:
        return self.key_path(key) in self.value_store

    def key_path(self, key) -> int:
        """Path hash of a key."""
        fields = self.config.encode_key(key)
        if self.config.hash_key:
            return self.hasher(fields)
        return fields[0]

    def value_hash(self, value=None) -> int:
        """Value hash of a value; ``None`` maps to the empty sentinel."""
        if value is None:
            return EMPTY_VALUE
        fields = self.config.encode_value(value)
        if self.config.hash_value:
            return self.hasher(fields)
        return fields[0]

    def has(self, key, value=None) -> bool:
        """Whether the subtree records exactly ``value`` for ``key``."""
        v = self.value_store.get(self.key_path(key))
        return v is not None and v == self.value_hash(value)

    def add_branch(
        self,
        proof: SparseMerkleProof,
        key,
        value=None,
        ignore_invalid_proof: bool = False,
    ) -> bool:
        """
        Verify a branch against the current root and merge it in.

        Args:
            proof: Proof for ``key`` produced by the full tree
            key: The key the proof is for
            value: The value at ``key``; ``None`` for a non-membership proof
            ignore_invalid_proof: Drop an invalid branch instead of raising

        Returns:
            True if the branch was added, False if it was ignored.

        Raises:
            InvalidProofError: If the proof does not verify and
                ``ignore_invalid_proof`` is false.
        """
        path = self.key_path(key)
        value_hash = self.value_hash(value)
        ok, updates = verify_proof_with_updates(
            proof, self.root, path, value_hash, self.hasher, self.depth
        )
        if not ok:
            if not ignore_invalid_proof:
                raise InvalidProofError(path, value_hash)
            logger.warning("Ignoring invalid branch for path %s", path)
            return False

        for node_hash, children in updates:
            self.node_store[node_hash] = children
        self.value_store[path] = value_hash
        logger.debug("Added branch for path %s (%d nodes)", path, len(updates))
        return True

    def side_nodes(self, path: int) -> List[int]:
        """Walk from the root down ``path`` collecting siblings."""
        path_bits = to_bits(path, self.depth)
        side_nodes = []
        node_hash = self.root
        for i in range(self.depth):
            children = self.node_store.get(node_hash)
            if children is None or len(children) != 2:
                raise IncompleteSubtreeError(path, i, node_hash)
            if path_bits[i]:
                side_nodes.append(children[0])
                node_hash = children[1]
            else:
                side_nodes.append(children[1])
                node_hash = children[0]
        return side_nodes

    def prove(self, key) -> SparseMerkleProof:
        """
        Create a proof for ``key`` against the current root.

        Raises:
            UnknownKeyError: If no branch was added for ``key``.
            IncompleteSubtreeError: If the branch is not fully connected to
                the current root.
        """
        path = self.key_path(key)
        if path not in self.value_store:
            raise UnknownKeyError(path)
        return SparseMerkleProof(tuple(self.side_nodes(path)), self.root)

    def update(self, key, value=None) -> int:
        """
        Set a new value for ``key`` and return the new root.

        The node and value stores only change once the full sibling chain
        has been collected.
        """
        path = self.key_path(key)
        if path not in self.value_store:
            raise UnknownKeyError(path)
        value_hash = self.value_hash(value)
        side_nodes = self.side_nodes(path)
        path_bits = to_bits(path, self.depth)

        current = value_hash
        self.node_store[current] = [current]
        for i in range(self.depth - 1, -1, -1):
            side_node = side_nodes[i]
            if path_bits[i]:
                children = [side_node, current]
            else:
                children = [current, side_node]
            current = self.hasher(children)
            self.node_store[current] = children

        self.value_store[path] = value_hash
        logger.debug("Updated path %s, root %s -> %s", path, self.root, current)
        self.root = current
        return self.root
