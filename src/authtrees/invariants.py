"""Invariant checks for subtrees and staged trees.

Used by the test suite and the benchmark scripts to validate a tree after a
sequence of operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from authtrees.errors import AuthTreeError, InvariantError
from authtrees.logging_config import get_logger
from authtrees.smt.proofs import SparseMerkleProof, verify_proof

logger = get_logger(__name__)

if TYPE_CHECKING:
    from authtrees.smt.deep_subtree import DeepSparseMerkleSubTree
    from authtrees.standard.tree_base import TreeBase


def check_subtree_invariants(subtree: DeepSparseMerkleSubTree) -> None:
    """Every recorded key must re-prove against the current root."""
    root = subtree.get_root()
    for path, value_hash in subtree.value_store.items():
        try:
            side_nodes = subtree.side_nodes(path)
        except AuthTreeError as e:
            raise InvariantError(f"Invariant failed: path {path} is not reachable from root {root}") from e
        proof = SparseMerkleProof(tuple(side_nodes), root)
        if not verify_proof(proof, root, path, value_hash, subtree.hasher, subtree.depth):
            raise InvariantError(f"Invariant failed: value at path {path} does not verify against root {root}")
    logger.debug("Subtree passed invariant checks (%d keys)", len(subtree.value_store))


def check_staged_tree_invariants(tree: TreeBase) -> None:
    """Every visible leaf must recompute its view's root from its sibling path."""
    committed = tree.get_num_leaves(False)
    total = tree.get_num_leaves(True)
    if committed > total:
        raise InvariantError(f"Invariant failed: {committed} committed leaves > {total} total leaves")
    if total > tree.max_leaves:
        raise InvariantError(f"Invariant failed: {total} leaves exceed capacity {tree.max_leaves}")

    for include_uncommitted in (False, True):
        root = tree.get_root(include_uncommitted)
        for index in range(tree.get_num_leaves(include_uncommitted)):
            leaf = tree.get_leaf_value(index, include_uncommitted)
            if leaf is None:
                raise InvariantError(
                    f"Invariant failed: leaf {index} missing (include_uncommitted={include_uncommitted})"
                )
            path = tree.get_sibling_path(index, include_uncommitted)
            if path.calculate_root(leaf, index, tree.hasher) != root:
                raise InvariantError(
                    f"Invariant failed: leaf {index} does not recompute root "
                    f"(include_uncommitted={include_uncommitted})"
                )
    logger.debug("Staged tree %r passed invariant checks (%d/%d leaves)", tree.name, committed, total)
