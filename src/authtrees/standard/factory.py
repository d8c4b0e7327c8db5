"""Factory functions for creating and loading staged trees."""

from typing import Type, TypeVar

from authtrees.errors import TreeNotFoundError
from authtrees.hashing import EMPTY_VALUE, Hasher
from authtrees.logging_config import get_logger
from authtrees.standard.store import KeyValueStore
from authtrees.standard.tree_base import StandardTree, TreeBase

logger = get_logger(__name__)

T = TypeVar("T", bound=TreeBase)


def new_tree(
    cls: Type[T],
    store: KeyValueStore,
    hasher: Hasher,
    name: str,
    depth: int,
    prefilled_size: int = 0,
) -> T:
    """
    Create a tree under ``name`` and commit its initial state.

    Args:
        cls: Tree class to instantiate
        store: Durable store
        hasher: Hash function for internal nodes
        name: Tree name, used as the key prefix in the store
        depth: Number of levels below the root
        prefilled_size: Number of zero leaves to start with

    Raises:
        ValueError: If a tree named ``name`` already exists in the store.
    """
    if cls.load_meta(store, name) is not None:
        raise ValueError(f"tree {name!r} already exists")
    tree = cls(store, hasher, name, depth)
    if prefilled_size > 0:
        if not isinstance(tree, StandardTree):
            raise TypeError(f"{cls.__name__} does not support prefilled leaves")
        tree.append_leaves([EMPTY_VALUE] * prefilled_size)
    tree.commit()
    logger.debug("Created tree %r with depth %d and %d leaves", name, depth, tree.size)
    return tree


def load_tree(cls: Type[T], store: KeyValueStore, hasher: Hasher, name: str) -> T:
    """
    Restore a committed tree from its stored metadata.

    Raises:
        TreeNotFoundError: If nothing is stored under ``name``.
    """
    meta = cls.load_meta(store, name)
    if meta is None:
        raise TreeNotFoundError(f"no tree named {name!r} in store")
    root, depth, size = meta
    logger.debug("Loaded tree %r with depth %d and %d leaves", name, depth, size)
    return cls(store, hasher, name, depth, size=size, root=root)

