"""
Field elements used as hashes, keys and values.

A hash is a plain ``int`` in ``[0, MODULUS)``. Its canonical string form is
the decimal representation and its canonical byte form is 32 bytes big-endian.
"""

from __future__ import annotations

from typing import Any, List

# Pallas base field
MODULUS = 0x40000000000000000000000000000000224698FC094CF91B992D30ED00000001
FIELD_BYTES = 32
FIELD_BITS = MODULUS.bit_length()

# Largest chunk of raw bytes that always fits below the modulus
_BYTES_PER_FIELD = 31


def to_field(x: int) -> int:
    """Reduce an integer into the field."""
    return x % MODULUS


def to_bits(x: int, n: int) -> List[int]:
    """Return the ``n`` low bits of ``x``, least significant first."""
    if x < 0:
        raise ValueError(f"cannot take bits of negative value {x}")
    return [(x >> i) & 1 for i in range(n)]


def field_to_bytes(x: int) -> bytes:
    return x.to_bytes(FIELD_BYTES, 'big')


def field_from_bytes(b: bytes) -> int:
    if len(b) != FIELD_BYTES:
        raise ValueError(f"expected {FIELD_BYTES} bytes, got {len(b)}")
    x = int.from_bytes(b, 'big')
    if x >= MODULUS:
        raise ValueError(f"value {x} is not a field element")
    return x


def to_fields(obj: Any) -> List[int]:
    """
    Encode a key or value as a list of field elements.

    Supported inputs:
        - ``int``: a single element, reduced into the field
        - ``bytes``: 31-byte big-endian chunks (at least one element)
        - ``str``: its UTF-8 bytes
        - objects with a ``to_fields()`` method: whatever it returns
        - ``list``/``tuple``: the concatenated encodings of the items

    Raises:
        TypeError: If the object has no canonical encoding.
    """
    if hasattr(obj, "to_fields"):
        return [to_field(int(f)) for f in obj.to_fields()]
    if isinstance(obj, bool):
        return [int(obj)]
    if isinstance(obj, int):
        return [to_field(obj)]
    if isinstance(obj, (bytes, bytearray)):
        if not obj:
            return [0]
        return [
            int.from_bytes(obj[i:i + _BYTES_PER_FIELD], 'big')
            for i in range(0, len(obj), _BYTES_PER_FIELD)
        ]
    if isinstance(obj, str):
        return to_fields(obj.encode('utf-8'))
    if isinstance(obj, (list, tuple)):
        fields: List[int] = []
        for item in obj:
            fields.extend(to_fields(item))
        return fields
    raise TypeError(f"no field encoding for {type(obj).__name__}")
