"""Membership checks in the shape consumed by an external circuit verifier."""

from authtrees.errors import MembershipError
from authtrees.hashing import Hasher, sha256_hasher
from authtrees.standard.sibling_path import SiblingPath


def verify_membership(
    root: int,
    sibling_path: SiblingPath,
    leaf: int,
    leaf_index: int,
    hasher: Hasher = sha256_hasher,
) -> None:
    """
    Assert that ``leaf`` sits at ``leaf_index`` in the tree with ``root``.

    Raises:
        MembershipError: If the root recomputed from the sibling path differs.
    """
    actual = sibling_path.calculate_root(leaf, leaf_index, hasher)
    if actual != root:
        raise MembershipError(
            f"leaf {leaf} at index {leaf_index} recomputes root {actual}, expected {root}"
        )


def is_member(
    root: int,
    sibling_path: SiblingPath,
    leaf: int,
    leaf_index: int,
    hasher: Hasher = sha256_hasher,
) -> bool:
    return sibling_path.calculate_root(leaf, leaf_index, hasher) == root
