"""Tests for SiblingPath and membership verification."""

import unittest

from authtrees import MembershipError, SiblingPath, sha256_hasher, verify_membership
from authtrees.field import MODULUS
from authtrees.standard import is_member
from tests.test_base import naive_root

H = sha256_hasher


class TestSiblingPath(unittest.TestCase):

    def setUp(self):
        self.leaves = [5, 6, 7]
        self.root = naive_root(self.leaves, 2)
        # siblings of leaf 7 at index 2: empty leaf 3, then node over leaves 0-1
        self.path = SiblingPath([0, H([5, 6])])

    def test_calculate_root(self):
        self.assertEqual(self.path.calculate_root(7, 2, H), self.root)
        self.assertNotEqual(self.path.calculate_root(7, 3, H), self.root)

    def test_calculate_root_index_out_of_range(self):
        with self.assertRaises(ValueError):
            self.path.calculate_root(7, 4, H)
        with self.assertRaises(ValueError):
            self.path.calculate_root(7, -1, H)

    def test_verify_membership(self):
        verify_membership(self.root, self.path, 7, 2, H)
        self.assertTrue(is_member(self.root, self.path, 7, 2, H))
        with self.assertRaises(MembershipError):
            verify_membership(self.root, self.path, 8, 2, H)
        self.assertFalse(is_member(self.root, self.path, 8, 2, H))

    def test_membership_error_is_assertion(self):
        with self.assertRaises(AssertionError):
            verify_membership(self.root + 1, self.path, 7, 2, H)

    def test_sequence_behaviour(self):
        self.assertEqual(len(self.path), 2)
        self.assertEqual(self.path.depth, 2)
        self.assertEqual(self.path[1], H([5, 6]))
        self.assertEqual(list(self.path), [0, H([5, 6])])
        self.assertEqual(self.path, SiblingPath((0, H([5, 6]))))
        self.assertNotEqual(self.path, SiblingPath([1, H([5, 6])]))

    def test_json(self):
        restored = SiblingPath.from_json(self.path.to_json())
        self.assertEqual(restored, self.path)
        self.assertIn('"0"', self.path.to_json())

    def test_bytes_layout(self):
        buf = self.path.to_bytes()
        self.assertEqual(len(buf), 4 + 2 * 32)
        self.assertEqual(buf[:4], b"\x00\x00\x00\x02")
        self.assertEqual(SiblingPath.from_bytes(buf), self.path)

    def test_from_bytes_rejects_bad_input(self):
        buf = self.path.to_bytes()
        with self.assertRaises(ValueError):
            SiblingPath.from_bytes(buf[:3])
        with self.assertRaises(ValueError):
            SiblingPath.from_bytes(buf[:-1])
        with self.assertRaises(ValueError):
            SiblingPath.from_bytes(b"\x00\x00\x00\x01" + (MODULUS).to_bytes(32, "big"))


if __name__ == "__main__":
    unittest.main()
