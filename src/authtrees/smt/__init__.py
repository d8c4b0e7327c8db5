"""
Sparse merkle tree proofs and the deep subtree built from them.
"""

from authtrees.smt.deep_subtree import DeepSparseMerkleSubTree, SubtreeConfig
from authtrees.smt.proofs import (
    NodeUpdate,
    SparseMerkleProof,
    compute_root,
    verify_proof,
    verify_proof_with_updates,
)
from authtrees.smt.sparse_tree import SparseMerkleTree

__all__ = [
    "DeepSparseMerkleSubTree",
    "NodeUpdate",
    "SparseMerkleProof",
    "SparseMerkleTree",
    "SubtreeConfig",
    "compute_root",
    "verify_proof",
    "verify_proof_with_updates",
]
