"""Tests for field encoding and hashing helpers."""

import hashlib
import unittest

from authtrees.field import (
    FIELD_BYTES,
    MODULUS,
    field_from_bytes,
    field_to_bytes,
    to_bits,
    to_field,
    to_fields,
)
from authtrees.hashing import EMPTY_VALUE, hash_pair, sha256_hasher, zero_hashes


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def to_fields(self):
        return [self.x, self.y]


class TestFieldEncoding(unittest.TestCase):

    def test_to_field_reduces(self):
        self.assertEqual(to_field(MODULUS + 5), 5)
        self.assertEqual(to_field(-1), MODULUS - 1)

    def test_to_bits_is_lsb_first(self):
        self.assertEqual(to_bits(0b1101, 6), [1, 0, 1, 1, 0, 0])
        self.assertEqual(to_bits(0b1101, 2), [1, 0])
        with self.assertRaises(ValueError):
            to_bits(-3, 4)

    def test_bytes_encoding(self):
        x = 20005205046905019185276322150472684212046819894939456380246051296521983948061
        b = field_to_bytes(x)
        self.assertEqual(len(b), FIELD_BYTES)
        self.assertEqual(field_from_bytes(b), x)

    def test_from_bytes_rejects_bad_input(self):
        with self.assertRaises(ValueError):
            field_from_bytes(b"\x00" * 31)
        with self.assertRaises(ValueError):
            field_from_bytes(b"\xff" * FIELD_BYTES)

    def test_to_fields(self):
        cases = [
            (5, [5]),
            (True, [1]),
            (MODULUS + 2, [2]),
            (b"", [0]),
            (b"\x01\x00", [256]),
            ("A", [65]),
            ([1, b"\x02"], [1, 2]),
            (Point(3, 4), [3, 4]),
        ]
        for obj, expected in cases:
            with self.subTest(obj=obj):
                self.assertEqual(to_fields(obj), expected)

    def test_to_fields_chunks_long_bytes(self):
        data = bytes(range(40))
        fields = to_fields(data)
        self.assertEqual(len(fields), 2)
        self.assertEqual(fields[0], int.from_bytes(data[:31], "big"))
        self.assertEqual(fields[1], int.from_bytes(data[31:], "big"))
        self.assertTrue(all(f < MODULUS for f in fields))

    def test_to_fields_unsupported(self):
        with self.assertRaises(TypeError):
            to_fields(1.5)


class TestHashing(unittest.TestCase):

    def test_sha256_hasher_matches_definition(self):
        expected = int.from_bytes(
            hashlib.sha256(field_to_bytes(1) + field_to_bytes(2)).digest(), "big"
        ) % MODULUS
        self.assertEqual(sha256_hasher([1, 2]), expected)
        self.assertEqual(hash_pair(sha256_hasher, 1, 2), expected)

    def test_sha256_hasher_is_order_sensitive(self):
        self.assertNotEqual(sha256_hasher([1, 2]), sha256_hasher([2, 1]))

    def test_zero_hashes(self):
        zs = zero_hashes(sha256_hasher, 3)
        self.assertEqual(len(zs), 4)
        self.assertEqual(zs[0], EMPTY_VALUE)
        for lower, upper in zip(zs, zs[1:]):
            self.assertEqual(upper, sha256_hasher([lower, lower]))


if __name__ == "__main__":
    unittest.main()
