"""
Benchmarks package for the staged tree and the deep sparse subtree.

Measures:
- StandardTree append, commit and sibling path generation
- DeepSparseMerkleSubTree add_branch, prove and update

Test data is generated deterministically from a seed so runs are comparable.
"""

from .config import BenchmarkConfig
from .runner import BenchmarkRunner

__all__ = ["BenchmarkConfig", "BenchmarkRunner"]
