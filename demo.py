#!/usr/bin/env python3
"""
Walkthrough of the staged tree and the deep sparse subtree.

Run with ``python demo.py`` (optionally ``--db path`` to use a sqlite store).
"""

import argparse
import sys

from authtrees import (
    DeepSparseMerkleSubTree,
    MemoryStore,
    SparseMerkleTree,
    SqliteStore,
    StandardTree,
    TreeNotFoundError,
    load_tree,
    new_tree,
    sha256_hasher,
    verify_membership,
)

PRIVATE_DATA_TREE_HEIGHT = 4


def staged_tree_demo(store) -> None:
    print("Staged tree")
    print("=" * 50)
    try:
        tree = load_tree(StandardTree, store, sha256_hasher, "privateData")
        print(f"loaded existing tree with {tree.get_num_leaves(False)} leaves")
    except TreeNotFoundError:
        tree = new_tree(StandardTree, store, sha256_hasher, "privateData", PRIVATE_DATA_TREE_HEIGHT)
    print(f"initial root:                {tree.get_root(True)}")

    start = tree.get_num_leaves(True)
    if start + 7 > tree.max_leaves:
        print("tree is full, nothing to append")
        return

    # staged leaves are only visible with include_uncommitted=True
    tree.append_leaves([20005205046905019185276322150472684212046819894939456380246051296521983948061])
    print(f"leaf {start} (uncommitted view): {tree.get_leaf_value(start, True)}")
    print(f"leaf {start} (committed view):   {tree.get_leaf_value(start, False)}")
    print(f"root incl. pending:          {tree.get_root(True)}")
    print(f"root committed only:         {tree.get_root(False)}")

    tree.commit()
    print("committed")
    print(f"root committed only:         {tree.get_root(False)}")

    for leaf in (11, 21, 31, 41, 51, 61):
        tree.append_leaves([leaf])
    root = tree.get_root(True)
    witness = tree.get_sibling_path(start + 3, True)
    print(f"witness for leaf {start + 3}: {witness.to_json()}")
    verify_membership(root, witness, 31, start + 3)
    print("membership of 31 verified against the pending root")

    tree.commit()
    print(f"final root:                  {tree.get_root(False)}")


def subtree_demo() -> None:
    print()
    print("Deep sparse subtree")
    print("=" * 50)
    full = SparseMerkleTree()
    for key, value in [("alice", 100), ("bob", 250), ("carol", 75)]:
        full.update(key, value)

    subtree = DeepSparseMerkleSubTree(full.get_root())
    subtree.add_branch(full.prove("alice"), "alice", 100)
    subtree.add_branch(full.prove("dave"), "dave")
    print(f"has alice=100: {subtree.has('alice', 100)}")
    print(f"dave absent:   {subtree.has('dave')}")

    new_root = subtree.update("alice", 90)
    print(f"subtree root after update matches full tree: {new_root == full.update('alice', 90)}")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--db", help="sqlite file to persist the staged tree in")
    args = parser.parse_args()

    store = SqliteStore(args.db) if args.db else MemoryStore()
    with store:
        staged_tree_demo(store)
    subtree_demo()
    return 0


if __name__ == "__main__":
    sys.exit(main())
