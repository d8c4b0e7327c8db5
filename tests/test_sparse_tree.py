"""Tests for the in-memory full sparse merkle tree."""

import unittest

from authtrees import EMPTY_VALUE, SparseMerkleTree, SubtreeConfig, sha256_hasher, verify_proof
from authtrees.hashing import zero_hashes


class TestSparseMerkleTree(unittest.TestCase):

    def setUp(self):
        self.depth = 6
        self.tree = SparseMerkleTree(SubtreeConfig(hash_key=False), depth=self.depth)
        self.empty_root = zero_hashes(sha256_hasher, self.depth)[self.depth]

    def test_empty_root(self):
        self.assertEqual(self.tree.get_root(), self.empty_root)
        self.assertEqual(len(self.tree), 0)

    def test_single_leaf_root_by_hand(self):
        root = self.tree.update(0, 7)
        zs = zero_hashes(sha256_hasher, self.depth)
        expected = sha256_hasher([7])
        for height in range(self.depth):
            expected = sha256_hasher([expected, zs[height]])
        self.assertEqual(root, expected)

    def test_delete_restores_empty_root(self):
        self.tree.update(5, 1)
        self.tree.update(9, 2)
        self.tree.update(5, None)
        self.tree.update(9)
        self.assertEqual(self.tree.get_root(), self.empty_root)
        self.assertEqual(len(self.tree), 0)

    def test_insertion_order_does_not_matter(self):
        other = SparseMerkleTree(SubtreeConfig(hash_key=False), depth=self.depth)
        for key in (1, 2, 40):
            self.tree.update(key, key * 10)
        for key in (40, 1, 2):
            other.update(key, key * 10)
        self.assertEqual(self.tree.get_root(), other.get_root())

    def test_prove_presence_and_absence(self):
        for key in (1, 2, 40):
            self.tree.update(key, key * 10)
        root = self.tree.get_root()
        for key in (1, 2, 40):
            with self.subTest(key=key):
                proof = self.tree.prove(key)
                self.assertTrue(verify_proof(proof, root, key, sha256_hasher([key * 10]), sha256_hasher, self.depth))
        proof = self.tree.prove(3)
        self.assertTrue(verify_proof(proof, root, 3, EMPTY_VALUE, sha256_hasher, self.depth))
        self.assertTrue(self.tree.has(3))
        self.assertTrue(self.tree.has(40, 400))
        self.assertEqual(self.tree.get_value_hash(2), sha256_hasher([20]))


if __name__ == "__main__":
    unittest.main()
