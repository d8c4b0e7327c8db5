"""Smoke tests for the benchmark helpers."""

import unittest

from authtrees import MODULUS
from benchmarks.config import BenchmarkConfig
from benchmarks.runner import BenchmarkRunner
from benchmarks.utils import generate_key_values, generate_leaves, summarize


class TestBenchmarkUtils(unittest.TestCase):

    def test_leaves_are_deterministic_field_elements(self):
        leaves = generate_leaves(20, seed=7)
        self.assertEqual(leaves, generate_leaves(20, seed=7))
        self.assertNotEqual(leaves, generate_leaves(20, seed=8))
        self.assertTrue(all(0 <= leaf < MODULUS for leaf in leaves))

    def test_key_values_have_distinct_keys(self):
        pairs = generate_key_values(50, seed=1)
        self.assertEqual(len({k for k, _ in pairs}), 50)

    def test_summarize(self):
        stats = summarize([1.0, 2.0, 3.0])
        self.assertAlmostEqual(stats["mean"], 2.0)
        self.assertAlmostEqual(stats["median"], 2.0)
        self.assertAlmostEqual(stats["std"], 1.0)
        self.assertEqual(summarize([])["mean"], 0.0)


class TestBenchmarkRunner(unittest.TestCase):

    def setUp(self):
        self.config = BenchmarkConfig(repetitions=2, smt_depth=64, skip_warmup=True)
        self.runner = BenchmarkRunner(self.config)

    def test_staged_run_verifies(self):
        results, metadata = self.runner.run_staged(size=8, depth=4)
        self.assertEqual(len(results), 2)
        self.assertTrue(all(r.verified for r in results))
        self.assertIn("commit", results[0].timings)
        self.assertEqual(metadata.tree_kind, "StandardTree")

    def test_staged_run_skips_oversized(self):
        results, _ = self.runner.run_staged(size=32, depth=4)
        self.assertEqual(results, [])

    def test_subtree_run_verifies(self):
        results, metadata = self.runner.run_subtree(size=4)
        self.assertEqual(len(results), 2)
        self.assertTrue(all(r.verified for r in results))
        self.assertEqual(set(results[0].timings), {"add_branch", "prove", "update"})
        self.assertEqual(metadata.depth, 64)


if __name__ == "__main__":
    unittest.main()
