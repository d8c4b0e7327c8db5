"""Correctness checks run after each benchmark repetition."""

import logging

from authtrees import (
    DeepSparseMerkleSubTree,
    InvariantError,
    StandardTree,
    check_staged_tree_invariants,
    check_subtree_invariants,
)


def verify_staged_tree(tree: StandardTree) -> bool:
    try:
        check_staged_tree_invariants(tree)
    except InvariantError as e:
        logging.error("Staged tree invariant violated: %s", e)
        return False
    return True


def verify_subtree(subtree: DeepSparseMerkleSubTree) -> bool:
    try:
        check_subtree_invariants(subtree)
    except InvariantError as e:
        logging.error("Subtree invariant violated: %s", e)
        return False
    return True
