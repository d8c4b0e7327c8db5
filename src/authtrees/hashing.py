"""Hash functions over field elements."""

from __future__ import annotations

import hashlib
from typing import Callable, Sequence

from authtrees.field import field_to_bytes, to_field

Hasher = Callable[[Sequence[int]], int]

# Value hash of an absent leaf
EMPTY_VALUE = 0

# Depth of the full sparse merkle tree
SMT_DEPTH = 254


def sha256_hasher(elements: Sequence[int]) -> int:
    """Hash field elements with SHA-256 and reduce the digest into the field."""
    h = hashlib.sha256()
    for e in elements:
        h.update(field_to_bytes(to_field(e)))
    return to_field(int.from_bytes(h.digest(), 'big'))


def hash_pair(hasher: Hasher, left: int, right: int) -> int:
    """Hash of an internal node from its two children."""
    return hasher([left, right])


def zero_hashes(hasher: Hasher, depth: int, zero_leaf: int = EMPTY_VALUE) -> list[int]:
    """
    Roots of empty subtrees indexed by height.

    ``result[0]`` is the empty leaf, ``result[depth]`` the root of an empty tree.
    """
    hashes = [zero_leaf]
    for _ in range(depth):
        hashes.append(hash_pair(hasher, hashes[-1], hashes[-1]))
    return hashes
