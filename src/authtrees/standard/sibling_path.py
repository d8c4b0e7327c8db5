"""Sibling paths produced by the staged tree."""

from __future__ import annotations

import json
import struct
from typing import Sequence, Tuple

from authtrees.field import FIELD_BYTES, field_from_bytes, field_to_bytes
from authtrees.hashing import Hasher, sha256_hasher


class SiblingPath:
    """
    The siblings of a leaf from the leaf level up to just below the root.

    ``data[0]`` is the sibling of the leaf itself.
    """
    __slots__ = ("data",)

    def __init__(self, data: Sequence[int]):
        self.data: Tuple[int, ...] = tuple(data)

    @property
    def depth(self) -> int:
        return len(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def __getitem__(self, i: int) -> int:
        return self.data[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, SiblingPath):
            return NotImplemented
        return self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"SiblingPath(depth={self.depth})"

    def calculate_root(self, leaf: int, index: int, hasher: Hasher = sha256_hasher) -> int:
        """Recompute the root from ``leaf`` at position ``index``."""
        if index < 0 or index >= (1 << self.depth):
            raise ValueError(f"index {index} out of range for depth {self.depth}")
        current = leaf
        for sibling in self.data:
            if index & 1:
                current = hasher([sibling, current])
            else:
                current = hasher([current, sibling])
            index >>= 1
        return current

    def to_json(self) -> str:
        return json.dumps([str(n) for n in self.data])

    @classmethod
    def from_json(cls, s: str) -> SiblingPath:
        return cls(int(n) for n in json.loads(s))

    def to_bytes(self) -> bytes:
        """Serialize as a 4-byte big-endian count followed by 32-byte elements."""
        return struct.pack(">I", len(self.data)) + b"".join(field_to_bytes(n) for n in self.data)

    @classmethod
    def from_bytes(cls, buf: bytes) -> SiblingPath:
        if len(buf) < 4:
            raise ValueError("buffer too short for a sibling path")
        (count,) = struct.unpack(">I", buf[:4])
        body = buf[4:]
        if len(body) != count * FIELD_BYTES:
            raise ValueError(f"expected {count * FIELD_BYTES} bytes of siblings, got {len(body)}")
        return cls(
            field_from_bytes(body[i * FIELD_BYTES:(i + 1) * FIELD_BYTES]) for i in range(count)
        )
