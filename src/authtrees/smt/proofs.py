"""
Proof algebra for full-depth sparse merkle trees.

A proof lists one sibling per level, ``side_nodes[0]`` being the sibling just
below the root. Bit ``i`` of the path hash selects the side at that level.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from authtrees.field import to_bits
from authtrees.hashing import SMT_DEPTH, Hasher, sha256_hasher

# (node hash, pre-image); the leaf entry has a one-element pre-image
NodeUpdate = Tuple[int, List[int]]


@dataclass(frozen=True)
class SparseMerkleProof:
    side_nodes: Tuple[int, ...]
    root: int

    def __post_init__(self):
        object.__setattr__(self, "side_nodes", tuple(self.side_nodes))

    @property
    def depth(self) -> int:
        return len(self.side_nodes)

    def to_dict(self) -> dict:
        """Export with every hash as its canonical decimal string."""
        return {
            "sideNodes": [str(n) for n in self.side_nodes],
            "root": str(self.root),
        }

    @classmethod
    def from_dict(cls, data: dict) -> SparseMerkleProof:
        return cls(tuple(int(n) for n in data["sideNodes"]), int(data["root"]))

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, s: str) -> SparseMerkleProof:
        return cls.from_dict(json.loads(s))


def compute_root(
    side_nodes: Sequence[int],
    path: int,
    value_hash: int,
    hasher: Hasher = sha256_hasher,
    depth: int = SMT_DEPTH,
) -> Tuple[int, List[NodeUpdate]]:
    """
    Recompute a root from a leaf value hash and its siblings.

    Returns:
        The computed root and every ``(hash, children)`` pair on the path,
        ordered from the leaf up to the root.
    """
    if len(side_nodes) != depth:
        raise ValueError(f"expected {depth} side nodes, got {len(side_nodes)}")

    path_bits = to_bits(path, depth)
    current = value_hash
    updates: List[NodeUpdate] = [(current, [current])]
    for i in range(depth - 1, -1, -1):
        node = side_nodes[i]
        if path_bits[i]:
            children = [node, current]
        else:
            children = [current, node]
        current = hasher(children)
        updates.append((current, children))
    return current, updates


def verify_proof_with_updates(
    proof: SparseMerkleProof,
    expected_root: int,
    path: int,
    value_hash: int,
    hasher: Hasher = sha256_hasher,
    depth: int = SMT_DEPTH,
) -> Tuple[bool, List[NodeUpdate]]:
    """
    Verify a proof and return the node updates it implies.

    The proof's claimed root must equal ``expected_root`` before anything is
    recomputed; on a mismatch no updates are returned.
    """
    if proof.root != expected_root:
        return False, []
    if proof.depth != depth:
        return False, []
    actual_root, updates = compute_root(proof.side_nodes, path, value_hash, hasher, depth)
    return actual_root == expected_root, updates


def verify_proof(
    proof: SparseMerkleProof,
    expected_root: int,
    path: int,
    value_hash: int,
    hasher: Hasher = sha256_hasher,
    depth: int = SMT_DEPTH,
) -> bool:
    ok, _ = verify_proof_with_updates(proof, expected_root, path, value_hash, hasher, depth)
    return ok
