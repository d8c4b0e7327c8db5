"""Deterministic test data for benchmarks."""

from typing import List, Tuple

import numpy as np

from authtrees import MODULUS


def generate_leaves(size: int, seed: int) -> List[int]:
    """``size`` pseudo-random field elements."""
    rng = np.random.default_rng(seed)
    # four 62-bit limbs give 248 bits, always below the modulus
    limbs = rng.integers(0, 1 << 62, size=(size, 4), dtype=np.int64)
    leaves = []
    for row in limbs:
        x = 0
        for limb in row:
            x = (x << 62) | int(limb)
        leaves.append(x % MODULUS)
    return leaves


def generate_key_values(size: int, seed: int) -> List[Tuple[int, int]]:
    """``size`` distinct ``(key, value)`` pairs."""
    rng = np.random.default_rng(seed)
    keys = rng.choice(np.arange(1, 10 * size + 1), size=size, replace=False)
    values = rng.integers(1, 1 << 62, size=size)
    return [(int(k), int(v)) for k, v in zip(keys, values)]


def summarize(samples: List[float]) -> dict:
    """Mean, median, p95 and standard deviation of timing samples in seconds."""
    arr = np.asarray(samples, dtype=float)
    if arr.size == 0:
        return {"mean": 0.0, "median": 0.0, "p95": 0.0, "std": 0.0}
    return {
        "mean": float(arr.mean()),
        "median": float(np.median(arr)),
        "p95": float(np.percentile(arr, 95)),
        "std": float(arr.std(ddof=1)) if arr.size > 1 else 0.0,
    }
