"""
Append-only merkle trees with staged leaves over a durable store.
"""

from authtrees.standard.factory import load_tree, new_tree
from authtrees.standard.sibling_path import SiblingPath
from authtrees.standard.store import KeyValueStore, MemoryStore, SqliteStore
from authtrees.standard.tree_base import StandardTree, TreeBase, decode_meta, encode_meta
from authtrees.standard.verify import is_member, verify_membership

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SiblingPath",
    "SqliteStore",
    "StandardTree",
    "TreeBase",
    "decode_meta",
    "encode_meta",
    "is_member",
    "load_tree",
    "new_tree",
    "verify_membership",
]
