"""
authtrees: authenticated merkle trees.

Quick-start imports::

    from authtrees import DeepSparseMerkleSubTree, StandardTree, new_tree

See subpackage ``__init__`` files for the full public surface.
"""

# Shared primitives
from authtrees.errors import (
    AuthTreeError,
    IncompleteSubtreeError,
    InvalidProofError,
    InvariantError,
    MembershipError,
    PersistenceError,
    TreeCapacityError,
    TreeNotFoundError,
    UnknownKeyError,
)
from authtrees.field import MODULUS, to_bits, to_field, to_fields
from authtrees.hashing import EMPTY_VALUE, SMT_DEPTH, Hasher, sha256_hasher
from authtrees.invariants import check_staged_tree_invariants, check_subtree_invariants

# Sparse merkle subtree
from authtrees.smt import (
    DeepSparseMerkleSubTree,
    SparseMerkleProof,
    SparseMerkleTree,
    SubtreeConfig,
    compute_root,
    verify_proof,
    verify_proof_with_updates,
)

# Staged tree
from authtrees.standard import (
    KeyValueStore,
    MemoryStore,
    SiblingPath,
    SqliteStore,
    StandardTree,
    TreeBase,
    load_tree,
    new_tree,
    verify_membership,
)

__all__ = [
    "EMPTY_VALUE",
    "MODULUS",
    "SMT_DEPTH",
    # Errors
    "AuthTreeError",
    # Sparse merkle subtree
    "DeepSparseMerkleSubTree",
    "Hasher",
    "IncompleteSubtreeError",
    "InvalidProofError",
    "InvariantError",
    # Staged tree
    "KeyValueStore",
    "MembershipError",
    "MemoryStore",
    "PersistenceError",
    "SiblingPath",
    "SparseMerkleProof",
    "SparseMerkleTree",
    "SqliteStore",
    "StandardTree",
    "SubtreeConfig",
    "TreeBase",
    "TreeCapacityError",
    "TreeNotFoundError",
    "UnknownKeyError",
    "check_staged_tree_invariants",
    "check_subtree_invariants",
    "compute_root",
    "load_tree",
    "new_tree",
    "sha256_hasher",
    "to_bits",
    "to_field",
    "to_fields",
    "verify_membership",
    "verify_proof",
    "verify_proof_with_updates",
]
